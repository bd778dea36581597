from .builders import (
    OPERATOR_REGISTRY,
    apply_ordering,
    apply_pagination,
    apply_projection,
    build_where,
    predicate_expression,
    row_to_record,
)

__all__ = [
    'OPERATOR_REGISTRY',
    'apply_ordering',
    'apply_pagination',
    'apply_projection',
    'build_where',
    'predicate_expression',
    'row_to_record',
]
