"""Database fixtures for rosterql tests (shared)."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from rosterql.models import Event, Organization, User


async def create_sample_organizations(session: AsyncSession):
    """Create and commit the organizations used across tests."""
    orgs = [
        Organization(id="org-1", name="Open Source Guild"),
        Organization(id="org-2", name="Chess Club"),
        Organization(id="org-bulk", name="Bulk Org"),
    ]
    session.add_all(orgs)
    await session.flush()
    await session.commit()
    return orgs


@pytest.fixture(scope="function")
async def sample_organizations(db_session: AsyncSession):
    return await create_sample_organizations(db_session)


async def create_sample_events(session: AsyncSession):
    events = [
        Event(id="ev-1", title="GraphQL Summit"),
        Event(id="ev-2", title="Python Meetup"),
    ]
    session.add_all(events)
    await session.flush()
    await session.commit()
    return events


@pytest.fixture(scope="function")
async def sample_events(db_session: AsyncSession):
    return await create_sample_events(db_session)


async def create_sample_members(session: AsyncSession, orgs, events):
    """Create and commit the members of org-1 plus one outsider in org-2."""
    org1, org2, _ = orgs
    summit, meetup = events
    users = [
        User(
            id="u1", first_name="John", last_name="Johnson", email="john@example.com",
            password="hash-u1", image="/u1.png", app_language_code="en",
            joined_organizations=[org1], admin_for=[org1], registered_events=[summit],
        ),
        User(
            id="u2", first_name="Alice", last_name="AJohnson", email="alice@example.com",
            password="hash-u2", image=None, app_language_code="fr",
            joined_organizations=[org1], registered_events=[meetup],
        ),
        User(
            id="u3", first_name="Joanna", last_name="Smith", email="joanna@example.com",
            password="hash-u3", image="/u3.png", app_language_code="en",
            joined_organizations=[org1, org2], registered_events=[summit, meetup],
        ),
        User(
            id="u4", first_name="Bob", last_name="O_Neil", email="bob@example.com",
            password="hash-u4", image=None, app_language_code="hi",
            joined_organizations=[org1],
        ),
        User(
            id="u5", first_name="Mary", last_name="OxNeil", email="mary@example.com",
            password="hash-u5", image="", app_language_code="de",
            joined_organizations=[org1],
        ),
        User(
            id="u6", first_name="Jo", last_name="Outsider", email="jo@example.com",
            password="hash-u6", image="/u6.png", app_language_code="en",
            joined_organizations=[org2], registered_events=[summit],
        ),
    ]
    session.add_all(users)
    await session.flush()
    await session.commit()
    return users


@pytest.fixture(scope="function")
async def sample_members(db_session: AsyncSession, sample_organizations, sample_events):
    return await create_sample_members(db_session, sample_organizations, sample_events)


async def create_bulk_members(session: AsyncSession, orgs, count: int = 25):
    """Create ``count`` members of org-bulk with zero-padded ids b01, b02, ..."""
    bulk_org = orgs[2]
    users = [
        User(
            id=f"b{i:02d}", first_name="Member", last_name=f"Number{i:02d}",
            email=f"member{i:02d}@example.com", password=f"hash-b{i:02d}",
            joined_organizations=[bulk_org],
        )
        for i in range(1, count + 1)
    ]
    session.add_all(users)
    await session.flush()
    await session.commit()
    return users


@pytest.fixture(scope="function")
async def bulk_members(db_session: AsyncSession, sample_organizations):
    return await create_bulk_members(db_session, sample_organizations)


async def seed_populated_db(session: AsyncSession):
    """Seed organizations, events and members and return the same structure as populated_db."""
    orgs = await create_sample_organizations(session)
    events = await create_sample_events(session)
    members = await create_sample_members(session, orgs, events)
    bulk = await create_bulk_members(session, orgs)
    return {
        'organizations': orgs,
        'events': events,
        'members': members,
        'bulk_members': bulk,
    }


@pytest.fixture(scope="function")
async def populated_db(sample_organizations, sample_events, sample_members, bulk_members):
    return {
        'organizations': sample_organizations,
        'events': sample_events,
        'members': sample_members,
        'bulk_members': bulk_members,
    }
