# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from loginlab.domain.users.entities import User, UserRole
from loginlab.domain.users.repositories import PasswordHasher, UserRepository
from loginlab.shared.logging import logger


@dataclass(slots=True, frozen=True)
class DemoUser:
    login_id: str
    password: str
    nickname: str
    role: UserRole
    hashed: bool


# Plain accounts serve the cookie/session modes, hashed ones security/jwt.
DEMO_USERS: tuple[DemoUser, ...] = (
    DemoUser("admin1", "1234", "관리자1", UserRole.ADMIN, hashed=False),
    DemoUser("user1", "1234", "User1", UserRole.USER, hashed=False),
    DemoUser("admin2", "1234", "관리자", UserRole.ADMIN, hashed=True),
    DemoUser("user", "1234", "유저1", UserRole.USER, hashed=True),
)


def seed_demo_users(users: UserRepository, password_hasher: PasswordHasher) -> int:
    created = 0
    for demo in DEMO_USERS:
        if users.exists_by_login_id(demo.login_id) or users.exists_by_nickname(demo.nickname):
            continue
        password = password_hasher.hash(demo.password) if demo.hashed else demo.password
        users.save(
            User(
                id=0,
                login_id=demo.login_id,
                password=password,
                nickname=demo.nickname,
                role=demo.role,
                password_hashed=demo.hashed,
            )
        )
        created += 1

    logger.info(f"seed_data: created {created} demo users")
    return created


__all__ = ["DEMO_USERS", "DemoUser", "seed_demo_users"]
