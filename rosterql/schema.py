"""Strawberry schema exposing ``organizationsMemberConnection``.

The resolver expects a context dict with:
  db_session    AsyncSession used by the SQLAlchemy member store (required)
  api_root_url  prefix for member image paths (falls back to settings)
"""
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

import strawberry
from strawberry.types import Info

from .config import get_settings
from .core.filters import FILTER_ARGUMENTS, LIST_OPERATORS
from .core.pagination import Page
from .service import MemberListingService
from .sorting import UserOrderBy
from .store import SQLAlchemyMemberStore

UserOrderByInput = strawberry.enum(UserOrderBy, name="UserOrderByInput")  # type: ignore


def _build_where_input():
    annotations: Dict[str, Any] = {}
    namespace: Dict[str, Any] = {}
    for arg_name, spec in FILTER_ARGUMENTS.items():
        base = strawberry.ID if spec.identifier else str
        annotations[arg_name] = Optional[List[base]] if spec.op in LIST_OPERATORS else Optional[base]
        # argument names keep their underscores (firstName_not_in), no camel-casing
        namespace[arg_name] = strawberry.field(name=arg_name, default=None, description=spec.description)
    namespace['__annotations__'] = annotations
    cls = type('UserWhereInput', (), namespace)
    return strawberry.input(cls, description="Filters for organization member listings")


UserWhereInput = _build_where_input()


def where_to_filter(where: Any) -> Dict[str, Any]:
    """Convert a ``UserWhereInput`` into the flat filter mapping."""
    if where is None:
        return {}
    result: Dict[str, Any] = {}
    for arg_name in FILTER_ARGUMENTS:
        value = getattr(where, arg_name, None)
        if value is not None:
            result[arg_name] = value
    return result


@strawberry.type(name="Event")
class EventType:
    id: strawberry.ID
    title: str


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    first_name: str
    last_name: str
    email: str
    app_language_code: str
    image: Optional[str] = None
    password: Optional[str] = None
    created_at: Optional[datetime] = None
    registered_events: List[EventType] = strawberry.field(default_factory=list)

    @classmethod
    def from_member(cls, member: Mapping[str, Any]) -> "UserType":
        events = [
            EventType(id=e['id'], title=e['title'])
            for e in (member.get('registered_events') or [])
        ]
        return cls(
            id=member['id'],
            first_name=member['first_name'],
            last_name=member['last_name'],
            email=member['email'],
            app_language_code=member['app_language_code'],
            image=member.get('image'),
            password=member.get('password'),
            created_at=member.get('created_at'),
            registered_events=events,
        )


@strawberry.type(name="ConnectionPageInfo")
class ConnectionPageInfo:
    has_next_page: bool
    has_previous_page: bool
    total_pages: Optional[int] = None
    next_page_no: Optional[int] = None
    prev_page_no: Optional[int] = None
    curr_page_no: Optional[int] = None


@strawberry.type(name="AggregateUser")
class AggregateUser:
    count: int


@strawberry.type(name="UserConnection")
class UserConnection:
    page_info: ConnectionPageInfo
    edges: List[UserType]
    aggregate: AggregateUser

    @classmethod
    def from_page(cls, page: Page) -> "UserConnection":
        return cls(
            page_info=ConnectionPageInfo(
                has_next_page=page.has_next,
                has_previous_page=page.has_prev,
                total_pages=page.total_pages,
                next_page_no=page.next_page,
                prev_page_no=page.prev_page,
                curr_page_no=page.current_page,
            ),
            edges=[UserType.from_member(m) for m in page.items],
            aggregate=AggregateUser(count=page.total_count),
        )


@strawberry.type
class Query:
    @strawberry.field(description="Members of an organization, filtered and paginated by page number")
    async def organizations_member_connection(
        self,
        info: Info,
        org_id: strawberry.ID,
        where: Optional[UserWhereInput] = None,  # type: ignore[valid-type]
        order_by: Optional[UserOrderByInput] = None,  # type: ignore[valid-type]
        first: Optional[int] = None,
        skip: Optional[int] = None,
    ) -> UserConnection:
        context = info.context or {}
        session = context.get('db_session')
        if session is None:
            raise ValueError("No db_session in context")
        settings = get_settings()
        api_root_url = context.get('api_root_url')
        if api_root_url is None:
            api_root_url = settings.api_root_url
        service = MemberListingService(
            SQLAlchemyMemberStore(session),
            timeout=settings.store_timeout,
        )
        page = await service.list(
            org_id,
            where=where_to_filter(where),
            order_by=order_by,
            first=first,
            skip=skip,
            api_root_url=api_root_url,
        )
        return UserConnection.from_page(page)


schema = strawberry.Schema(query=Query)
