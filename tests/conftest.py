import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.auth.security import create_access_token
from app.database import get_db
from app.main import app
from app.models import Base
from app.models.category import Category, EventCategory
from app.models.event import Event
from app.models.user import User


def utc_now() -> datetime:
    # Event times are stored as naive UTC.
    return datetime.now(timezone.utc).replace(tzinfo=None)


@pytest.fixture
def session_factory(tmp_path):
    """A fresh SQLite file per test. NullPool keeps connections from crossing event loops."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def create_tables():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_tables())
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    asyncio.run(engine.dispose())


@pytest.fixture
def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seed(session_factory):
    """Persist ORM objects directly and return them with their generated ids."""
    def _seed(*objects):
        async def _add():
            async with session_factory() as session:
                session.add_all(objects)
                await session.commit()

        asyncio.run(_add())
        return objects if len(objects) > 1 else objects[0]
    return _seed


@pytest.fixture
def fetch_all(session_factory):
    """Run a select statement outside the app and return the scalar rows."""
    def _fetch(statement):
        async def _run():
            async with session_factory() as session:
                result = await session.execute(statement)
                return result.scalars().all()

        return asyncio.run(_run())
    return _fetch


@pytest.fixture
def make_event(seed):
    def _make_event(title="Tech Talk", starts_in=timedelta(days=1), duration=timedelta(hours=2), categories=(), **fields):
        start = utc_now() + starts_in
        event = Event(
            event_title=title,
            start_time=start,
            end_time=start + duration,
            location=fields.pop("location", "Main Hall"),
            photos=fields.pop("photos", []),
            **fields,
        )
        event.event_categories = [EventCategory(category=category) for category in categories]
        return seed(event)
    return _make_event


@pytest.fixture
def ended_event(make_event):
    return make_event(title="Past Meetup", starts_in=-timedelta(days=3))


@pytest.fixture
def upcoming_event(make_event):
    return make_event(title="Future Summit", starts_in=timedelta(days=3))


@pytest.fixture
def make_category(seed):
    def _make_category(name):
        return seed(Category(category_name=name))
    return _make_category


@pytest.fixture
def auth_headers(seed):
    """Seed a user with the given role and return bearer headers for them."""
    def _auth_headers(email="organizer@example.com", role="organizer", create=True):
        if create:
            seed(User(email=email, full_name="Test User", role=role))
        token = create_access_token(email)
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers
