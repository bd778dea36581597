"""Reference SQLAlchemy models for organization members."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Table
from sqlalchemy.orm import DeclarativeBase, relationship


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for rosterql models."""
    pass


organization_members = Table(
    'organization_members',
    Base.metadata,
    Column('user_id', String(36), ForeignKey('users.id'), primary_key=True),
    Column('organization_id', String(36), ForeignKey('organizations.id'), primary_key=True),
    comment='Roster: users who joined an organization',
)

organization_admins = Table(
    'organization_admins',
    Base.metadata,
    Column('user_id', String(36), ForeignKey('users.id'), primary_key=True),
    Column('organization_id', String(36), ForeignKey('organizations.id'), primary_key=True),
    comment='Users administering an organization',
)

event_registrations = Table(
    'event_registrations',
    Base.metadata,
    Column('user_id', String(36), ForeignKey('users.id'), primary_key=True),
    Column('event_id', String(36), ForeignKey('events.id'), primary_key=True),
    comment='Users registered to an event',
)


class Organization(Base):
    __tablename__ = 'organizations'
    __table_args__ = {'comment': 'Organizations'}

    id = Column(String(36), primary_key=True, default=_new_id, comment='Organization primary key')
    name = Column(String(200), nullable=False, comment='Display name')

    members = relationship('User', secondary=organization_members, back_populates='joined_organizations')
    admins = relationship('User', secondary=organization_admins, back_populates='admin_for')


class Event(Base):
    __tablename__ = 'events'
    __table_args__ = {'comment': 'Organization events'}

    id = Column(String(36), primary_key=True, default=_new_id, comment='Event primary key')
    title = Column(String(200), nullable=False, comment='Event title')

    registrants = relationship('User', secondary=event_registrations, back_populates='registered_events')


class User(Base):
    """Application users"""
    __tablename__ = 'users'
    __table_args__ = {'comment': 'Application users'}

    id = Column(String(36), primary_key=True, default=_new_id, comment='User primary key')
    first_name = Column(String(100), nullable=False, comment='Given name')
    last_name = Column(String(100), nullable=False, comment='Family name')
    email = Column(String(255), unique=True, nullable=False, comment='Unique login email')
    password = Column(String(255), nullable=False, comment='Password hash, never returned')
    image = Column(String(500), nullable=True, comment='Avatar path relative to the API root')
    app_language_code = Column(String(10), nullable=False, default='en', comment='UI language')
    created_at = Column(DateTime, default=_utcnow, comment='Creation timestamp (UTC)')

    joined_organizations = relationship('Organization', secondary=organization_members, back_populates='members')
    admin_for = relationship('Organization', secondary=organization_admins, back_populates='admins')
    registered_events = relationship('Event', secondary=event_registrations, back_populates='registrants')
