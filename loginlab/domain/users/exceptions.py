# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from http import HTTPStatus

from loginlab.shared.errors.base import DomainError


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND


class CredentialMismatchError(DomainError):
    code = "credential_mismatch"
    status = HTTPStatus.UNAUTHORIZED


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class FieldViolationError(DomainError):
    field: str = ""
    message: str = ""

    def to_field_error(self) -> dict[str, str]:
        return {"field": self.field, "type": self.code, "message": self.message}


class DuplicateLoginIdError(FieldViolationError):
    code = "duplicate_login_id"
    status = HTTPStatus.CONFLICT
    field = "loginId"
    message = "login id is already taken"


class DuplicateNicknameError(FieldViolationError):
    code = "duplicate_nickname"
    status = HTTPStatus.CONFLICT
    field = "nickname"
    message = "nickname is already taken"


class PasswordConfirmationMismatchError(FieldViolationError):
    code = "password_confirmation_mismatch"
    status = HTTPStatus.UNPROCESSABLE_ENTITY
    field = "passwordCheck"
    message = "passwords do not match"


class SignupRejectedError(DomainError):
    code = "signup_rejected"
    status = HTTPStatus.UNPROCESSABLE_ENTITY

    def __init__(self, violations: Sequence[FieldViolationError]) -> None:
        self.violations = list(violations)
        super().__init__(
            context={
                "fields": [v.field for v in self.violations],
                "errors": [v.to_field_error() for v in self.violations],
            }
        )
