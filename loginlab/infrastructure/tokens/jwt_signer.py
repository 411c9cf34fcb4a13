# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from loginlab.domain.auth.exceptions import InvalidSignatureError, TokenExpiredError
from loginlab.domain.users.repositories import TokenSigner

_JWT_ALG = "HS256"


class PyJwtTokenSigner(TokenSigner):
    def __init__(self, secret: str, *, clock: Callable[[], datetime] | None = None) -> None:
        if not secret:
            raise ValueError("jwt_secret_blank")
        self._secret = secret
        self._clock = clock or (lambda: datetime.now(UTC))

    def sign(self, claims: Mapping[str, Any], ttl: timedelta) -> str:
        now = self._clock()
        payload: dict[str, Any] = dict(claims)
        payload["iat"] = int(now.timestamp())
        payload["exp"] = int((now + ttl).timestamp())
        return jwt.encode(payload, self._secret, algorithm=_JWT_ALG)

    def verify(self, token: str) -> dict[str, Any]:
        # Expiry is judged before the signature so an expired token always
        # reports as expired.
        try:
            unverified = jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError as exc:
            raise InvalidSignatureError(context={"reason": "malformed"}) from exc

        exp = unverified.get("exp")
        if not isinstance(exp, (int, float)):
            raise InvalidSignatureError(context={"reason": "missing_exp"})
        if exp <= self._clock().timestamp():
            raise TokenExpiredError()

        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[_JWT_ALG],
                options={"verify_exp": False, "verify_iat": False, "require": ["exp"]},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidSignatureError() from exc
