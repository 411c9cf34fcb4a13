# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hmac

from loginlab.domain.users.entities import User
from loginlab.domain.users.exceptions import CredentialMismatchError, UserNotFoundError
from loginlab.domain.users.repositories import PasswordHasher, UserRepository


class CredentialVerifier:
    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def verify(self, login_id: str, password: str) -> User:
        user = self._users.find_by_login_id(login_id)
        if user is None:
            raise UserNotFoundError(context={"login_id": login_id})

        if user.password_hashed:
            matches = self._password_hasher.verify(password, user.password)
        else:
            matches = hmac.compare_digest(user.password.encode(), password.encode())

        if not matches:
            raise CredentialMismatchError()
        return user
