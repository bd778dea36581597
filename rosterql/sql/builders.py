"""Compile predicate trees, orderings and pagination into SQLAlchemy statements."""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping

from sqlalchemy import and_, inspect as sa_inspect, true
from sqlalchemy.orm import defer, selectinload
from sqlalchemy.sql import ColumnElement

from ..core.naming import from_camel
from ..core.pagination import Paged
from ..core.predicates import LIKE_ESCAPE, Conjunction, FieldPredicate

# Operator registry: predicate op -> column expression
OPERATOR_REGISTRY: Dict[str, Callable[[Any, Any], Any]] = {
    'eq': lambda col, v: col == v,
    'ne': lambda col, v: col != v,
    'in': lambda col, v: col.in_(list(v)),
    'not_in': lambda col, v: col.not_in(list(v)),
    'ilike': lambda col, v: col.ilike(v.to_like(LIKE_ESCAPE), escape=LIKE_ESCAPE),
}


def _model_attr(model_cls, name: str):
    attr_name = from_camel(name)
    mapper = sa_inspect(model_cls)
    if attr_name not in mapper.all_orm_descriptors.keys():
        raise ValueError(f"Unknown filter column: {name} on {model_cls.__name__}")
    return getattr(model_cls, attr_name)


def predicate_expression(model_cls, predicate: FieldPredicate) -> ColumnElement:
    """Build the WHERE expression for a single predicate.

    Dotted paths walk relationships: ``registeredEvents.title`` becomes
    ``User.registered_events.any(Event.title ...)``.
    """
    head, _, rest = predicate.field.partition('.')
    attr = _model_attr(model_cls, head)
    if rest:
        rel = getattr(attr, 'property', None)
        target = getattr(getattr(rel, 'mapper', None), 'class_', None)
        if target is None:
            raise ValueError(f"Not a relationship: {head} on {model_cls.__name__}")
        inner = FieldPredicate(rest, predicate.op, predicate.value)
        return attr.any(predicate_expression(target, inner))
    op_fn = OPERATOR_REGISTRY.get(predicate.op)
    if not op_fn:
        raise ValueError(f"Unknown filter operator: {predicate.op} for {predicate.field}")
    return op_fn(attr, predicate.value)


def build_where(model_cls, conjunction: Conjunction) -> ColumnElement:
    clauses = [predicate_expression(model_cls, p) for p in conjunction]
    if not clauses:
        return true()
    return and_(*clauses)


def apply_ordering(stmt, *, model_cls, ordering: Iterable):
    seen = set()
    for name, direction in ordering or ():
        dv = str(direction or 'asc').lower()
        if dv not in ('asc', 'desc'):
            raise ValueError(f"Invalid order direction '{direction}'. Use asc or desc")
        col = _model_attr(model_cls, name)
        stmt = stmt.order_by(col.desc() if dv == 'desc' else col.asc())
        seen.add(from_camel(name))
    # primary key tiebreaker keeps repeated listings in the same order
    for pk_col in sa_inspect(model_cls).primary_key:
        if pk_col.key not in seen:
            stmt = stmt.order_by(getattr(model_cls, pk_col.key).asc())
    return stmt


def apply_projection(stmt, *, model_cls, exclude: Iterable[str] = (), expand: Iterable[str] = ()):
    options = [defer(_model_attr(model_cls, name)) for name in exclude or ()]
    options += [selectinload(_model_attr(model_cls, name)) for name in expand or ()]
    if options:
        stmt = stmt.options(*options)
    return stmt


def apply_pagination(stmt, pagination: Paged):
    if pagination.offset:
        stmt = stmt.offset(pagination.offset)
    return stmt.limit(pagination.page_size)


def _columns_dict(instance, skip: Iterable[str] = ()) -> Dict[str, Any]:
    mapper = sa_inspect(type(instance))
    return {
        attr.key: getattr(instance, attr.key)
        for attr in mapper.column_attrs
        if attr.key not in skip
    }


def row_to_record(instance, *, exclude: Iterable[str] = (), expand: Iterable[str] = ()) -> Mapping[str, Any]:
    """Turn a loaded model instance into a plain record dict.

    Excluded columns are omitted entirely; expanded relations become lists of
    column dicts.
    """
    skip = {from_camel(name) for name in exclude or ()}
    record = _columns_dict(instance, skip)
    for name in expand or ():
        key = from_camel(name)
        related = getattr(instance, key)
        if related is None:
            record[key] = None
        elif isinstance(related, (list, tuple, set)):
            ordered = sorted(related, key=lambda r: sa_inspect(r).identity or ())
            items: List[Dict[str, Any]] = [_columns_dict(r) for r in ordered]
            record[key] = items
        else:
            record[key] = _columns_dict(related)
    return record
