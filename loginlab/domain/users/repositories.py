# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Protocol

from loginlab.domain.auth.entities import ServerSession

from .entities import User


class UserRepository(Protocol):
    def find_by_id(self, user_id: int) -> User | None: ...
    def find_by_login_id(self, login_id: str) -> User | None: ...
    def exists_by_login_id(self, login_id: str) -> bool: ...
    def exists_by_nickname(self, nickname: str) -> bool: ...
    def save(self, user: User) -> User: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class SessionStore(Protocol):
    def create(self, user_id: int, max_inactive: int) -> ServerSession: ...
    def get(self, key: str) -> ServerSession | None: ...
    def touch(self, key: str) -> ServerSession | None: ...
    def invalidate(self, key: str) -> bool: ...


class TokenSigner(Protocol):
    def sign(self, claims: Mapping[str, Any], ttl: timedelta) -> str: ...
    def verify(self, token: str) -> dict[str, Any]: ...
