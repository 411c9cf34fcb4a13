# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import exists, select

from loginlab.domain.users.entities import User as DomainUser
from loginlab.domain.users.repositories import UserRepository
from loginlab.infrastructure.db.models import User
from loginlab.infrastructure.db.session import session_scope


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        login_id=row.login_id,
        password=row.password,
        nickname=row.nickname,
        role=row.role,
        password_hashed=bool(row.password_hashed),
    )


class SqlAlchemyUserRepository(UserRepository):
    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def find_by_login_id(self, login_id: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.scalars(select(User).where(User.login_id == login_id)).first()
            return _to_domain(row) if row else None

    def exists_by_login_id(self, login_id: str) -> bool:
        with session_scope() as session:
            return bool(session.scalar(select(exists().where(User.login_id == login_id))))

    def exists_by_nickname(self, nickname: str) -> bool:
        with session_scope() as session:
            return bool(session.scalar(select(exists().where(User.nickname == nickname))))

    def save(self, user: DomainUser) -> DomainUser:
        with session_scope() as session:
            row = User(
                login_id=user.login_id,
                password=user.password,
                password_hashed=user.password_hashed,
                nickname=user.nickname,
                role=user.role,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)
