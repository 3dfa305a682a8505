"""
Shared fixtures: a SQLite database behind the connection cache and a test client
"""

import os

# settings need a URL at import; the fixtures below point the cache at tmp_path instead
os.environ.setdefault("DATABASE_URL", "sqlite://")

import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.routes_events import get_image_uploader
from app.core import db as db_module
from app.core.db import ConnectionCache
from app.models import Event
from app.services.media_service import ImageUploadService

@pytest.fixture(scope="session")
def connection_cache(tmp_path_factory):
    """Connection cache backed by a SQLite file under the pytest temp directory"""
    database_file = tmp_path_factory.mktemp("db") / "dev_events.db"
    cache = ConnectionCache(f"sqlite:///{database_file}")
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr(db_module, "get_connection_cache", lambda: cache)
        yield cache
    cache.reset()

@pytest.fixture
def database(connection_cache):
    """Create tables on the cached connection and drop them afterwards"""
    database = asyncio.run(connection_cache.get_connection())
    database.create_all()
    yield database
    database.drop_all()

@pytest.fixture
def db_session(database):
    """Create test database session"""
    db = database.session()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def uploads():
    """Requests received by the fake media host"""
    return []

@pytest.fixture
def uploader(uploads):
    def handler(request: httpx.Request) -> httpx.Response:
        uploads.append(request)
        return httpx.Response(
            200,
            json={"secure_url": "https://res.cloudinary.com/demo/image/upload/DevEvent/cover.png"}
        )

    return ImageUploadService(
        cloud_name="demo",
        api_key="key",
        api_secret="secret",
        transport=httpx.MockTransport(handler)
    )

@pytest.fixture
def client(database, uploader):
    from main import app

    app.dependency_overrides[get_image_uploader] = lambda: uploader
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

@pytest.fixture
def sample_event(db_session):
    """Create a sample event for testing"""
    event = Event(
        title="My Event",
        slug="my-event",
        description="A gathering of developers",
        overview="Talks and workshops",
        image="https://res.cloudinary.com/demo/image/upload/DevEvent/my-event.png",
        venue="Moscone Center",
        location="San Francisco, CA",
        date="2025-11-03",
        time="09:00",
        mode="offline",
        audience="Developers",
        organizer="Dev Community",
        agenda=["09:00 Keynote", "10:00 Workshops"],
        tags=["python", "web"],
    )
    db_session.add(event)
    db_session.commit()
    db_session.refresh(event)
    return event
