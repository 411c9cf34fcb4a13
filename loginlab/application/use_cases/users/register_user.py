# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from loginlab.domain.users.entities import User, UserRole
from loginlab.domain.users.exceptions import (
    DuplicateLoginIdError,
    DuplicateNicknameError,
    FieldViolationError,
    PasswordConfirmationMismatchError,
    SignupRejectedError,
)
from loginlab.domain.users.repositories import PasswordHasher, UserRepository
from loginlab.shared.logging import logger


@dataclass(slots=True, frozen=True)
class SignupCommand:
    login_id: str
    password: str
    password_check: str
    nickname: str


class RegisterUserUseCase:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, command: SignupCommand, *, hash_password: bool = False) -> User:
        violations: list[FieldViolationError] = []
        if self._users.exists_by_login_id(command.login_id):
            violations.append(DuplicateLoginIdError())
        if self._users.exists_by_nickname(command.nickname):
            violations.append(DuplicateNicknameError())
        if command.password != command.password_check:
            violations.append(PasswordConfirmationMismatchError())
        if violations:
            logger.info(
                f"auth.signup: rejected login_id={command.login_id} "
                f"fields={[v.field for v in violations]}"
            )
            raise SignupRejectedError(violations)

        password = self._password_hasher.hash(command.password) if hash_password else command.password
        user = User(
            id=0,
            login_id=command.login_id,
            password=password,
            nickname=command.nickname,
            role=UserRole.USER,
            password_hashed=hash_password,
        )
        return self._users.save(user)
