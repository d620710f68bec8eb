"""
Pytest configuration and fixtures.

Environment variables are pinned before the app is imported so token
behaviour does not depend on the developer's shell. Repository functions are
replaced with an in-memory store, so no PostgreSQL instance is needed.
"""

import itertools
import os

# Test JWT secret long enough for HS256 without key-length warnings
os.environ["JWT_SECRET"] = "test-jwt-secret-key-for-pytest-minimum-32-chars"
os.environ.pop("ACCESS_TOKEN_EXPIRE_MIN", None)
os.environ.pop("PODCAST_DEFAULT_RATING", None)

import pytest
from fastapi.testclient import TestClient

from auth import repository as auth_repository
from auth import security
from podcasts import repository as podcast_repository

AUTH_REPOSITORY_FUNCTIONS = (
    "create_user",
    "get_user_by_email",
    "get_user_by_id",
    "update_user",
)

PODCAST_REPOSITORY_FUNCTIONS = (
    "list_podcasts",
    "create_podcast",
    "get_podcast",
    "update_podcast",
    "delete_podcast",
    "create_episode",
    "list_episodes",
    "update_episode",
    "delete_episode",
)


class FakeStore:
    """In-memory stand-in for the users/podcasts/episodes tables."""

    def __init__(self):
        self.users: dict[int, dict] = {}
        self.podcasts: dict[int, dict] = {}
        self.episodes: dict[int, dict] = {}
        self._user_ids = itertools.count(1)
        self._podcast_ids = itertools.count(1)
        self._episode_ids = itertools.count(1)

    def install(self, monkeypatch):
        for name in AUTH_REPOSITORY_FUNCTIONS:
            monkeypatch.setattr(auth_repository, name, getattr(self, name))
        for name in PODCAST_REPOSITORY_FUNCTIONS:
            monkeypatch.setattr(podcast_repository, name, getattr(self, name))

    # users

    def _email_owner(self, email):
        email = auth_repository.normalize_email(email)
        for row in self.users.values():
            if row["email"] == email:
                return row
        return None

    async def create_user(self, *, email, password_hash, role):
        if self._email_owner(email) is not None:
            raise auth_repository.EmailTakenError(email)
        user_id = next(self._user_ids)
        self.users[user_id] = {
            "id": user_id,
            "email": auth_repository.normalize_email(email),
            "password_hash": password_hash,
            "role": role,
        }
        return dict(self.users[user_id])

    async def get_user_by_email(self, email):
        row = self._email_owner(email)
        return dict(row) if row is not None else None

    async def get_user_by_id(self, user_id):
        row = self.users.get(user_id)
        return dict(row) if row is not None else None

    async def update_user(self, user_id, *, email=None, password_hash=None):
        row = self.users.get(user_id)
        if row is None:
            return None
        if email is not None:
            owner = self._email_owner(email)
            if owner is not None and owner["id"] != user_id:
                raise auth_repository.EmailTakenError(email)
            row["email"] = auth_repository.normalize_email(email)
        if password_hash is not None:
            row["password_hash"] = password_hash
        return dict(row)

    # podcasts

    async def list_podcasts(self):
        return [dict(row) for row in self.podcasts.values()]

    async def create_podcast(self, *, title, category, rating):
        podcast_id = next(self._podcast_ids)
        self.podcasts[podcast_id] = {
            "id": podcast_id,
            "title": title,
            "category": category,
            "rating": rating,
        }
        return dict(self.podcasts[podcast_id])

    async def get_podcast(self, podcast_id):
        row = self.podcasts.get(podcast_id)
        return dict(row) if row is not None else None

    async def update_podcast(self, podcast_id, *, title=None, category=None, rating=None):
        row = self.podcasts.get(podcast_id)
        if row is None:
            return None
        if title is not None:
            row["title"] = title
        if category is not None:
            row["category"] = category
        if rating is not None:
            row["rating"] = rating
        return dict(row)

    async def delete_podcast(self, podcast_id):
        if self.podcasts.pop(podcast_id, None) is None:
            return False
        # ON DELETE CASCADE
        for episode_id in [e["id"] for e in self.episodes.values() if e["podcast_id"] == podcast_id]:
            del self.episodes[episode_id]
        return True

    # episodes

    async def create_episode(self, *, podcast_id, title, category):
        if podcast_id not in self.podcasts:
            return None
        episode_id = next(self._episode_ids)
        self.episodes[episode_id] = {
            "id": episode_id,
            "podcast_id": podcast_id,
            "title": title,
            "category": category,
        }
        return dict(self.episodes[episode_id])

    async def list_episodes(self, podcast_id):
        return [dict(row) for row in self.episodes.values() if row["podcast_id"] == podcast_id]

    def _scoped_episode(self, podcast_id, episode_id):
        row = self.episodes.get(episode_id)
        if row is None or row["podcast_id"] != podcast_id:
            return None
        return row

    async def update_episode(self, podcast_id, episode_id, *, title=None, category=None):
        row = self._scoped_episode(podcast_id, episode_id)
        if row is None:
            return None
        if title is not None:
            row["title"] = title
        if category is not None:
            row["category"] = category
        return dict(row)

    async def delete_episode(self, podcast_id, episode_id):
        if self._scoped_episode(podcast_id, episode_id) is None:
            return False
        del self.episodes[episode_id]
        return True


@pytest.fixture
def store(monkeypatch):
    """Fresh in-memory store wired into both repositories."""
    fake = FakeStore()
    fake.install(monkeypatch)
    return fake


@pytest.fixture
def client(store):
    """Test client over the real app; the DB lifespan is not entered."""
    from main import app

    return TestClient(app)


@pytest.fixture
def run_op(client):
    """Call the operation endpoint: run_op(name, input=None, token=None)."""

    def _run(operation, input=None, token=None, headers=None):
        body = {"operation": operation}
        if input is not None:
            body["input"] = input
        request_headers = dict(headers or {})
        if token is not None:
            request_headers["Authorization"] = f"Bearer {token}"
        return client.post("/operations", json=body, headers=request_headers)

    return _run


@pytest.fixture
def listener(store):
    """A stored Listener account and a valid token for it."""
    user_id = next(store._user_ids)
    store.users[user_id] = {
        "id": user_id,
        "email": "ttt@ttt.com",
        "password_hash": security.hash_password("12345"),
        "role": "Listener",
    }
    return {"id": user_id, "token": security.build_access_token(user_id=user_id)}
