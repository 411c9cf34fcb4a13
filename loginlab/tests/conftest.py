from __future__ import annotations

import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="loginlab-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}")
os.environ.setdefault("LOG_FILE", os.path.join(_TMP_DIR, "test.log"))
os.environ.setdefault("JWT_SECRET", "test-signing-key-0123456789abcdef0123456789")
os.environ["APP_ENV"] = "test"

from dataclasses import replace  # noqa: E402
from datetime import UTC, datetime, timedelta  # noqa: E402

import pytest  # noqa: E402

from loginlab.domain.users.entities import User, UserRole  # noqa: E402
from loginlab.domain.users.repositories import PasswordHasher, UserRepository  # noqa: E402
from loginlab.infrastructure.sessions.memory_session_store import InMemorySessionStore  # noqa: E402
from loginlab.infrastructure.tokens.jwt_signer import PyJwtTokenSigner  # noqa: E402

SIGNING_KEY = "unit-test-signing-key-0123456789abcdef0123"


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1
        self.saved = 0

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def find_by_login_id(self, login_id: str) -> User | None:
        return next((u for u in self._users.values() if u.login_id == login_id), None)

    def exists_by_login_id(self, login_id: str) -> bool:
        return self.find_by_login_id(login_id) is not None

    def exists_by_nickname(self, nickname: str) -> bool:
        return any(u.nickname == nickname for u in self._users.values())

    def save(self, user: User) -> User:
        stored = replace(user, id=self._seq)
        self._seq += 1
        self._users[stored.id] = stored
        self.saved += 1
        return stored

    def delete(self, user_id: int) -> None:
        self._users.pop(user_id, None)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime.now(UTC).replace(microsecond=0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def sessions(clock: FakeClock) -> InMemorySessionStore:
    return InMemorySessionStore(clock=clock)


@pytest.fixture()
def signer(clock: FakeClock) -> PyJwtTokenSigner:
    return PyJwtTokenSigner(SIGNING_KEY, clock=clock)


@pytest.fixture()
def alice(users: InMemoryUserRepository) -> User:
    return users.save(User(id=0, login_id="alice", password="pw1", nickname="Alice"))


@pytest.fixture()
def admin(users: InMemoryUserRepository, hasher: DeterministicHasher) -> User:
    return users.save(
        User(
            id=0,
            login_id="root",
            password=hasher.hash("rootpw"),
            nickname="Root",
            role=UserRole.ADMIN,
            password_hashed=True,
        )
    )
