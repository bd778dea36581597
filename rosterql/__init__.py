"""rosterql public API.

Exposes the pure building blocks eagerly and the SQLAlchemy-backed pieces
lazily, so that importing the predicate builder does not pull in the ORM
models. The Strawberry schema lives in rosterql.schema.

- build_member_filter, resolve_pagination, Page, get_sort
- MemberListingService, to_public_member
- MemberStore, RawPage, SQLAlchemyMemberStore (lazy)
- ClientInputError, InfrastructureError, RosterQLError
"""
from __future__ import annotations

from .core.filters import build_member_filter
from .core.pagination import Page, Paged, Unpaged, resolve_pagination
from .errors import ClientInputError, InfrastructureError, RosterQLError
from .sorting import get_sort


def __getattr__(name: str):  # PEP 562 lazy exports
    import importlib as _importlib
    if name in {'MemberStore', 'RawPage', 'SQLAlchemyMemberStore'}:
        return getattr(_importlib.import_module(__name__ + '.store'), name)
    if name in {'MemberListingService', 'to_public_member'}:
        return getattr(_importlib.import_module(__name__ + '.service'), name)
    raise AttributeError(name)


__all__ = [
    'build_member_filter', 'resolve_pagination', 'Page', 'Paged', 'Unpaged', 'get_sort',
    'MemberListingService', 'to_public_member',
    'MemberStore', 'RawPage', 'SQLAlchemyMemberStore',
    'ClientInputError', 'InfrastructureError', 'RosterQLError',
]
