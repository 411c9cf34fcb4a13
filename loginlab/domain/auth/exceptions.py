# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from loginlab.shared.errors.base import DomainError

BEARER_CHALLENGE = 'Bearer realm="loginlab"'


class TokenError(DomainError):
    code = "token_invalid"
    status = HTTPStatus.UNAUTHORIZED
    headers = {"WWW-Authenticate": f'{BEARER_CHALLENGE}, error="invalid_token"'}


class InvalidSignatureError(TokenError):
    code = "invalid_signature"


class TokenExpiredError(TokenError):
    code = "token_expired"


class AuthenticationRequiredError(DomainError):
    code = "authentication_required"
    status = HTTPStatus.UNAUTHORIZED


class AccessDeniedError(DomainError):
    code = "access_denied"
    status = HTTPStatus.FORBIDDEN
