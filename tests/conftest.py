"""
BlogApp Client Core — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Inventory (all function-scoped):
    ├── mock_supabase: MagicMock shaped like the supabase AsyncClient
    ├── connection_checker: Switchable online/offline oracle
    ├── cache_box: Opened CacheBox in a temporary directory
    ├── sample_image_bytes: Minimal JPEG bytes for upload tests
    ├── sample_blog / sample_blogs: Ready-made Blog records
    └── make_blog: Factory for more Blog records
"""

import os
import tempfile
from datetime import datetime, timezone
from typing import List
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid1

import pytest
import pytest_asyncio


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE blogapp is imported so the settings singleton picks them up
os.environ["SUPABASE_URL"] = "https://test-project.supabase.co"
os.environ["SUPABASE_ANON_KEY"] = "test-anon-key-not-real"
os.environ["CACHE_DIR"] = tempfile.mkdtemp(prefix="blogapp_test_")
os.environ["LOG_LEVEL"] = "WARNING"

from blogapp.core.cache_box import CacheBox  # noqa: E402
from blogapp.core.connection_checker import ConnectionChecker  # noqa: E402
from blogapp.schemas.blog import Blog  # noqa: E402

PUBLIC_URL = "https://test-project.supabase.co/storage/v1/object/public/blog_images/"


class StubConnectionChecker(ConnectionChecker):
    """Connectivity oracle the test controls; counts probes."""

    def __init__(self, online: bool = True):
        self.online = online
        self.calls = 0

    async def is_connected(self) -> bool:
        self.calls += 1
        return self.online


@pytest.fixture
def connection_checker():
    return StubConnectionChecker(online=True)


@pytest.fixture
def mock_supabase():
    """
    Provides a mock supabase AsyncClient.

    Query builders are synchronous and chainable; only `execute()`, the
    storage calls and the auth calls are awaited, so those are AsyncMocks.

    Usage:
        mock_supabase.table.return_value.insert.return_value.execute.return_value.data = [row]
    """
    client = MagicMock()

    table = client.table.return_value
    table.insert.return_value.execute = AsyncMock(return_value=MagicMock(data=[]))
    table.select.return_value.execute = AsyncMock(return_value=MagicMock(data=[]))
    table.select.return_value.eq.return_value.execute = AsyncMock(
        return_value=MagicMock(data=[])
    )

    bucket = client.storage.from_.return_value
    bucket.upload = AsyncMock(return_value=MagicMock())
    bucket.get_public_url = AsyncMock(side_effect=lambda path: PUBLIC_URL + path)
    bucket.remove = AsyncMock(return_value=[])

    client.auth.sign_up = AsyncMock()
    client.auth.sign_in_with_password = AsyncMock()
    client.auth.get_session = AsyncMock(return_value=None)
    return client


@pytest_asyncio.fixture
async def cache_box(tmp_path):
    return await CacheBox.open("blogs", tmp_path)


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: SOI marker + JFIF header + EOI marker."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def make_blog():
    def factory(**overrides) -> Blog:
        data = {
            "id": str(uuid1()),
            "poster_id": "u1",
            "title": "Hello",
            "content": "World",
            "image_url": "https://cdn.example.com/hello.jpg",
            "topics": ["Tech"],
            "updated_at": datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
            "poster_name": None,
        }
        data.update(overrides)
        return Blog(**data)

    return factory


@pytest.fixture
def sample_blog(make_blog):
    return make_blog()


@pytest.fixture
def sample_blogs(make_blog) -> List[Blog]:
    return [
        make_blog(title="First", topics=["Tech", "Programming"], poster_name="Ada"),
        make_blog(title="Second", topics=[], poster_name="Grace"),
    ]


def blog_row(blog: Blog, profile_name=None) -> dict:
    """A `blogs` row as PostgREST returns it, optionally with the profile join."""
    row = blog.to_row()
    if profile_name is not None:
        row["profiles"] = {"name": profile_name}
    return row


@pytest.fixture
def make_row():
    return blog_row


@pytest.fixture
def offline_checker():
    return StubConnectionChecker(online=False)
