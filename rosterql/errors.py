"""Error types raised by rosterql.

Client input problems and infrastructure failures are kept apart so that the
transport layer can report the first as request errors and the second as
server-side failures. Both carry a stable machine-readable ``code``.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

MISSING_PAGINATION_CURSOR = 'MISSING_PAGINATION_CURSOR'
INVALID_PAGE_SIZE = 'INVALID_PAGE_SIZE'
INVALID_PAGE_NUMBER = 'INVALID_PAGE_NUMBER'
INVALID_ORDER_BY = 'INVALID_ORDER_BY'
CONFLICTING_FILTER = 'CONFLICTING_FILTER'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
STORE_TIMEOUT = 'STORE_TIMEOUT'
MALFORMED_STORE_RESULT = 'MALFORMED_STORE_RESULT'


class RosterQLError(Exception):
    """Base class for all rosterql errors."""

    default_code = 'ROSTERQL_ERROR'

    def __init__(self, message: str, *, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    @property
    def extensions(self) -> Dict[str, Any]:
        # graphql-core copies this onto the GraphQLError it wraps us in
        return {'code': self.code}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ClientInputError(RosterQLError, ValueError):
    """Raised when the caller supplied invalid or incomplete arguments."""

    default_code = 'BAD_USER_INPUT'


class InfrastructureError(RosterQLError):
    """Raised when the member store is unreachable, times out or misbehaves."""

    default_code = 'INTERNAL_SERVER_ERROR'


__all__ = [
    'RosterQLError',
    'ClientInputError',
    'InfrastructureError',
    'MISSING_PAGINATION_CURSOR',
    'INVALID_PAGE_SIZE',
    'INVALID_PAGE_NUMBER',
    'INVALID_ORDER_BY',
    'CONFLICTING_FILTER',
    'STORE_UNAVAILABLE',
    'STORE_TIMEOUT',
    'MALFORMED_STORE_RESULT',
]
