"""Test configuration and fixtures.

Every test gets its own in-memory SQLite database seeded with a small
gallery:

- users: owner (uploader), friend, stranger (uploader), admin
- albums: public, hidden public, private, shared with friend, private
  hidden, two children of the public album, a tag album and a password
  protected album of the stranger
- photos spread over those albums plus two unsorted photos
"""
import os
from datetime import datetime
from typing import Dict

# Set test environment BEFORE importing gallery modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import gallery.models  # noqa: F401  (registers every table)
from gallery.core.snapshot import ConfigSnapshot
from gallery.core.viewer import ViewerContext
from gallery.database import Base, register_sqlite_functions
from gallery.models import ConfigEntry, Photo, PlainAlbum, TagAlbum, User


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database for a single test."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    register_sqlite_functions(test_engine)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield test_engine
    
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def seeded(session_maker) -> Dict[str, int]:
    """Seed the gallery and return the ids of everything by name."""
    async with session_maker() as session:
        owner = User(username="owner", display_name="Olivia", may_upload=True)
        friend = User(username="friend", display_name="Finn")
        stranger = User(username="stranger", may_upload=True)
        admin = User(username="admin", display_name="Ada", is_admin=True)
        session.add_all([owner, friend, stranger, admin])
        await session.flush()
        
        public = PlainAlbum(
            title="Holidays", owner=owner, public=True, viewable=True,
            full_photo=False, downloadable=True, share_button_visible=True,
            sorting_col="title", sorting_order="DESC",
            created_at=datetime(2021, 1, 1),
        )
        hidden_public = PlainAlbum(
            title="Hidden public", owner=owner, public=True, viewable=False,
            created_at=datetime(2021, 1, 2),
        )
        private = PlainAlbum(
            title="Private", owner=owner, public=False, viewable=True,
            full_photo=False, downloadable=True,
            created_at=datetime(2021, 1, 3),
        )
        shared = PlainAlbum(
            title="Shared with friend", owner=owner, public=False, viewable=True,
            shared_with=[friend], created_at=datetime(2021, 1, 4),
        )
        private_hidden = PlainAlbum(
            title="Private hidden", owner=owner, public=False, viewable=False,
            created_at=datetime(2021, 1, 5),
        )
        tags = TagAlbum(
            title="Sunsets", owner=owner, public=True, viewable=True,
            show_tags="sunset", created_at=datetime(2021, 1, 6),
        )
        locked = PlainAlbum(
            title="Locked", owner=stranger, public=False, viewable=True,
            requires_link=True, password="$2y$10$hash",
            created_at=datetime(2021, 1, 7),
        )
        session.add_all([public, hidden_public, private, shared, private_hidden, tags, locked])
        await session.flush()
        
        child_public = PlainAlbum(
            title="Beach", owner=owner, public=True, viewable=True,
            parent_id=public.id, created_at=datetime(2021, 2, 1),
        )
        child_private = PlainAlbum(
            title="Private child", owner=owner, public=False, viewable=True,
            parent_id=public.id, created_at=datetime(2021, 2, 2),
        )
        session.add_all([child_public, child_private])
        await session.flush()
        
        photos = {
            "p_public": Photo(album_id=public.id, owner_id=owner.id, title="Sunset over the sea"),
            "p_private": Photo(album_id=private.id, owner_id=owner.id, description="sunset at home"),
            "p_shared": Photo(album_id=shared.id, owner_id=owner.id, tags="family,SUNSET"),
            "p_hidden": Photo(
                album_id=hidden_public.id, owner_id=owner.id, location="Sunset Boulevard",
            ),
            "p_locked": Photo(album_id=locked.id, owner_id=stranger.id, public=True, title="Locked sunset"),
            "p_child": Photo(
                album_id=child_public.id, owner_id=owner.id, title="Dunes",
                model="Canon EOS 5D", taken_at=datetime(2021, 6, 1, 18, 30),
            ),
            "p_unsorted_owner": Photo(album_id=None, owner_id=owner.id, title="Draft", model="Canon EOS R"),
            "p_unsorted_public": Photo(album_id=None, owner_id=stranger.id, public=True, title="Public sunrise"),
        }
        session.add_all(photos.values())
        await session.commit()
        
        ids = {
            "owner": owner.id,
            "friend": friend.id,
            "stranger": stranger.id,
            "admin": admin.id,
            "public": public.id,
            "hidden_public": hidden_public.id,
            "private": private.id,
            "shared": shared.id,
            "private_hidden": private_hidden.id,
            "tags": tags.id,
            "locked": locked.id,
            "child_public": child_public.id,
            "child_private": child_private.id,
        }
        ids.update({name: photo.id for name, photo in photos.items()})
        return ids


@pytest_asyncio.fixture
async def db(session_maker, seeded):
    """Session on the seeded database, separate from the seeding session."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def config() -> ConfigSnapshot:
    """Documented defaults only."""
    return ConfigSnapshot()


@pytest.fixture
def single_library(config) -> ConfigSnapshot:
    return config.with_values(single_library="1")


@pytest.fixture
def viewers(seeded) -> Dict[str, ViewerContext]:
    return {
        "anonymous": ViewerContext.anonymous(),
        "owner": ViewerContext.user(seeded["owner"], can_upload=True, display_name="Olivia"),
        "friend": ViewerContext.user(seeded["friend"], display_name="Finn"),
        "stranger": ViewerContext.user(seeded["stranger"], can_upload=True, display_name="stranger"),
        "admin": ViewerContext.admin(seeded["admin"], display_name="Ada"),
    }


@pytest.fixture
def store_config(session_maker):
    """Persist settings rows: ``await store_config(single_library="1")``."""
    async def _store(**values: str) -> None:
        async with session_maker() as session:
            session.add_all(ConfigEntry(key=key, value=value) for key, value in values.items())
            await session.commit()
    return _store
