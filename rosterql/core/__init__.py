# Core subpackage: pure filter building, predicates and pagination (no I/O).
from .filters import FILTER_ARGUMENTS, FilterArgument, build_member_filter, normalize_where
from .naming import camelize_keys, from_camel, to_camel
from .pagination import Page, PageMeta, Paged, Pagination, Unpaged, resolve_pagination
from .predicates import Conjunction, FieldPredicate, MatchPattern, escape_like

__all__ = [
    'FILTER_ARGUMENTS','FilterArgument','build_member_filter','normalize_where',
    'camelize_keys','from_camel','to_camel',
    'Page','PageMeta','Paged','Pagination','Unpaged','resolve_pagination',
    'Conjunction','FieldPredicate','MatchPattern','escape_like',
]
