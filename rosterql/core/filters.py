from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from ..errors import CONFLICTING_FILTER, ClientInputError
from .predicates import EQ, ILIKE, IN, NE, NOT_IN, Conjunction, FieldPredicate, MatchPattern

logger = logging.getLogger(__name__)

# Path of the roster relation every member listing is restricted to
ORGANIZATION_MEMBERSHIP = 'joinedOrganizations.id'

# Filter operators as callers name them in the nested form
CALLER_OPERATORS: Dict[str, str] = {
    'eq': 'eq',
    'ne': 'ne',
    'in': 'in',
    'notIn': 'not_in',
    'contains': 'contains',
    'startsWith': 'starts_with',
}

# Argument-name suffix per operator in the flat form (firstName_not_in, ...)
OPERATOR_SUFFIXES: Dict[str, str] = {
    'eq': '',
    'ne': '_not',
    'in': '_in',
    'not_in': '_not_in',
    'contains': '_contains',
    'starts_with': '_starts_with',
}

LIST_OPERATORS = {'in', 'not_in'}
SCALAR_FIELD_OPERATORS = ('eq', 'ne', 'in', 'not_in', 'contains', 'starts_with')


def _as_tuple(value: Any) -> Tuple[Any, ...]:
    if isinstance(value, (set, frozenset)):
        return tuple(sorted(value, key=repr))
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


# (operator) -> predicate builder; the field table below decides which
# (field, operator) pairs exist.
PREDICATE_BUILDERS: Dict[str, Callable[[str, Any], FieldPredicate]] = {
    'eq': lambda path, v: FieldPredicate(path, EQ, v),
    'ne': lambda path, v: FieldPredicate(path, NE, v),
    'in': lambda path, v: FieldPredicate(path, IN, _as_tuple(v)),
    'not_in': lambda path, v: FieldPredicate(path, NOT_IN, _as_tuple(v)),
    'contains': lambda path, v: FieldPredicate(path, ILIKE, MatchPattern(str(v))),
    'starts_with': lambda path, v: FieldPredicate(path, ILIKE, MatchPattern.anchor(str(v))),
}


@dataclass(frozen=True)
class FilterArgument:
    """One supported (field, operator) pair of the member filter."""

    name: str
    path: str
    op: str
    identifier: bool = False
    description: Optional[str] = None

    def build(self, value: Any) -> FieldPredicate:
        return PREDICATE_BUILDERS[self.op](self.path, value)


def expand_filter_args(
    name: str,
    path: Optional[str] = None,
    ops: Iterable[str] = SCALAR_FIELD_OPERATORS,
    *,
    identifier: bool = False,
) -> Dict[str, FilterArgument]:
    """Expand a field into one argument per operator, suffixed the flat-form way."""
    expanded: Dict[str, FilterArgument] = {}
    for op_name in ops:
        arg_name = f"{name}{OPERATOR_SUFFIXES[op_name]}"
        expanded[arg_name] = FilterArgument(
            name=name,
            path=path or name,
            op=op_name,
            identifier=identifier,
        )
    return expanded


def _filter_arguments() -> Dict[str, FilterArgument]:
    args: Dict[str, FilterArgument] = {}
    args.update(expand_filter_args('id', ops=('eq', 'ne', 'in', 'not_in'), identifier=True))
    args.update(expand_filter_args('firstName'))
    args.update(expand_filter_args('lastName'))
    args.update(expand_filter_args('email'))
    args.update(expand_filter_args('appLanguageCode'))
    args['admin_for'] = FilterArgument(
        name='adminFor',
        path='adminFor.id',
        op='eq',
        identifier=True,
        description='Members administering the given organization',
    )
    args['event_title_contains'] = FilterArgument(
        name='eventTitle',
        path='registeredEvents.title',
        op='contains',
        description='Members registered to an event whose title contains the text',
    )
    return args


# Flat argument name -> FilterArgument, in the order predicates are emitted
FILTER_ARGUMENTS: Dict[str, FilterArgument] = _filter_arguments()

_BY_FIELD_AND_OP: Dict[Tuple[str, str], str] = {
    (spec.name, spec.op): arg_name for arg_name, spec in FILTER_ARGUMENTS.items()
}

# Field name -> argument for fields with a single operator, so that
# {'adminFor': 'org-1'} means {'adminFor': {'eq': 'org-1'}}
_SCALAR_SHORTHAND: Dict[str, str] = {
    spec.name: arg_name
    for arg_name, spec in FILTER_ARGUMENTS.items()
    if sum(1 for other in FILTER_ARGUMENTS.values() if other.name == spec.name) == 1
}


def _same_value(arg_name: str, a: Any, b: Any) -> bool:
    if FILTER_ARGUMENTS[arg_name].op in LIST_OPERATORS:
        return _as_tuple(a) == _as_tuple(b)
    return a == b


def normalize_where(where: Optional[Mapping]) -> Dict[str, Any]:
    """Flatten a filter mapping into ``{flat argument name: value}``.

    Accepts the flat form (``{'firstName_contains': 'jo'}``), the nested form
    (``{'firstName': {'contains': 'jo'}}``) or a mix of both. A scalar under a
    single-operator field name (``adminFor``, ``eventTitle``) uses that operator.
    ``None`` values are absent; unknown keys are dropped.
    """
    flat: Dict[str, Any] = {}

    def _put(arg_name: str, value: Any) -> None:
        if value is None:
            return
        if arg_name in flat and not _same_value(arg_name, flat[arg_name], value):
            raise ClientInputError(
                f"Conflicting values for filter '{arg_name}'",
                code=CONFLICTING_FILTER,
            )
        flat[arg_name] = value

    for key, value in (where or {}).items():
        if isinstance(value, Mapping):
            for op_key, op_value in value.items():
                op_name = CALLER_OPERATORS.get(op_key)
                arg_name = _BY_FIELD_AND_OP.get((key, op_name)) if op_name else None
                if arg_name is None:
                    logger.debug(f"Ignoring unsupported filter {key}.{op_key}")
                    continue
                _put(arg_name, op_value)
        elif key in FILTER_ARGUMENTS:
            _put(key, value)
        elif key in _SCALAR_SHORTHAND:
            _put(_SCALAR_SHORTHAND[key], value)
        else:
            logger.debug(f"Ignoring unknown filter argument: {key}")
    return flat


def build_member_filter(org_id: Any, where: Optional[Mapping] = None) -> Conjunction:
    """Translate a member filter into a predicate tree.

    The organization-membership predicate always comes first; the rest follow
    the declaration order of :data:`FILTER_ARGUMENTS`, so the result never
    depends on the iteration order of ``where``.
    """
    passed = normalize_where(where)
    predicates = [FieldPredicate(ORGANIZATION_MEMBERSHIP, EQ, org_id)]
    for arg_name, spec in FILTER_ARGUMENTS.items():
        value = passed.get(arg_name)
        if value is None:
            continue
        predicates.append(spec.build(value))
    return Conjunction(tuple(predicates))
