# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeAlias

from loginlab.domain.exceptions import InvariantViolationError


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(slots=True, frozen=True)
class User:

    id: int
    login_id: str
    password: str
    nickname: str
    role: UserRole = UserRole.USER
    # False for plain-text credentials, True for hashed ones
    password_hashed: bool = False

    def __post_init__(self) -> None:
        if not self.login_id.strip():
            raise InvariantViolationError("login_id", "must not be blank")
        if not self.nickname.strip():
            raise InvariantViolationError("nickname", "must not be blank")

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    def authorities(self) -> list[str]:
        return [self.role.name]


@dataclass(slots=True, frozen=True)
class LocalUser:
    """Principal backed directly by a stored user record."""

    user: User
    kind: str = field(default="local", init=False)

    @property
    def id(self) -> int:
        return self.user.id

    @property
    def display_name(self) -> str:
        return self.user.nickname

    @property
    def role(self) -> UserRole:
        return self.user.role

    @property
    def raw_attributes(self) -> Mapping[str, Any]:
        return {}


@dataclass(slots=True, frozen=True)
class FederatedUser:
    """Principal authenticated by an external identity provider.

    The provider's attribute map is kept verbatim; identity and role come
    from the local record it was linked to.
    """

    user: User
    provider: str
    subject: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    kind: str = field(default="federated", init=False)

    @classmethod
    def from_attributes(
        cls, user: User, provider: str, attributes: Mapping[str, Any]
    ) -> FederatedUser:
        subject = str(attributes.get("sub") or attributes.get("id") or user.login_id)
        return cls(user=user, provider=provider, subject=subject, attributes=dict(attributes))

    @property
    def id(self) -> int:
        return self.user.id

    @property
    def display_name(self) -> str:
        name = self.attributes.get("name")
        return str(name) if name else self.user.nickname

    @property
    def role(self) -> UserRole:
        return self.user.role

    @property
    def raw_attributes(self) -> Mapping[str, Any]:
        return self.attributes


Principal: TypeAlias = LocalUser | FederatedUser


def as_principal(user: User) -> Principal:
    return LocalUser(user=user)
