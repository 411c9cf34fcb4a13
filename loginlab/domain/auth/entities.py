# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TypeAlias

from loginlab.domain.users.entities import Principal, User, UserRole


class AuthMode(str, Enum):
    COOKIE = "cookie"
    SESSION = "session"
    SECURITY = "security"
    JWT = "jwt"

    @property
    def uses_server_session(self) -> bool:
        return self in (AuthMode.SESSION, AuthMode.SECURITY)

    @property
    def hashes_passwords(self) -> bool:
        return self in (AuthMode.SECURITY, AuthMode.JWT)


@dataclass(slots=True, frozen=True)
class CookieArtifact:
    value: str
    max_age: int
    name: str = "userId"


@dataclass(slots=True, frozen=True)
class ServerSession:
    key: str
    user_id: int
    expires_at: datetime
    max_inactive: int


@dataclass(slots=True, frozen=True)
class ServerSessionArtifact:
    session: ServerSession

    @property
    def key(self) -> str:
        return self.session.key


@dataclass(slots=True, frozen=True)
class TokenArtifact:
    token: str
    login_id: str
    issued_at: datetime
    expires_at: datetime


SessionArtifact: TypeAlias = CookieArtifact | ServerSessionArtifact | TokenArtifact


class AccessLevel(str, Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"

    @property
    def required_role(self) -> UserRole | None:
        return UserRole.ADMIN if self is AccessLevel.ADMIN else None


@dataclass(slots=True, frozen=True)
class Decision:
    allowed: bool
    reason: str

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = Decision(allowed=True, reason="ok")
DENY_UNAUTHENTICATED = Decision(allowed=False, reason="unauthenticated")
DENY_FORBIDDEN = Decision(allowed=False, reason="forbidden")


@dataclass(slots=True)
class SecurityContext:
    """Request-scoped authentication holder for the security login mode."""

    principal: Principal | None = None
    authorities: list[str] = field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None

    def authenticate(self, principal: Principal) -> None:
        self.principal = principal
        self.authorities = [principal.role.name]

    def clear(self) -> None:
        self.principal = None
        self.authorities = []

    def user(self) -> User | None:
        return self.principal.user if self.principal else None


@dataclass(slots=True, frozen=True)
class LogoutOutcome:
    clear_artifact: bool
    invalidated: bool = False
