# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""How each login mode carries its artifact over HTTP."""

from __future__ import annotations

from typing import Protocol

from flask import Request, Response

from loginlab.domain.auth.entities import (
    AuthMode,
    CookieArtifact,
    ServerSessionArtifact,
    SessionArtifact,
    TokenArtifact,
)
from loginlab.shared.config import AuthConfig

USER_ID_COOKIE = "userId"
SESSION_COOKIE = "SESSION"


class ArtifactTransport(Protocol):
    def read(self, request: Request) -> str | None: ...
    def write(self, response: Response, artifact: SessionArtifact) -> None: ...
    def clear(self, response: Response) -> None: ...


class CookieTransport:
    def __init__(self, name: str, config: AuthConfig) -> None:
        self._name = name
        self._config = config

    def read(self, request: Request) -> str | None:
        return request.cookies.get(self._name) or None

    def write(self, response: Response, artifact: SessionArtifact) -> None:
        if isinstance(artifact, CookieArtifact):
            value, max_age = artifact.value, artifact.max_age
        elif isinstance(artifact, ServerSessionArtifact):
            # Browser-session cookie; the server enforces inactivity expiry
            value, max_age = artifact.key, None
        else:
            raise TypeError(f"{type(artifact).__name__} cannot travel in a cookie")
        response.set_cookie(
            self._name,
            value,
            max_age=max_age,
            httponly=True,
            samesite=self._config.cookie_samesite,
            secure=self._config.cookie_secure,
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(
            self._name,
            httponly=True,
            samesite=self._config.cookie_samesite,
            secure=self._config.cookie_secure,
        )


class BearerTransport:
    """Tokens come in on ``Authorization`` and go out in the response body."""

    def read(self, request: Request) -> str | None:
        header = request.headers.get("Authorization", "")
        if header.startswith("Bearer "):
            return header[7:].strip() or None
        return None

    def write(self, response: Response, artifact: SessionArtifact) -> None:
        if not isinstance(artifact, TokenArtifact):
            raise TypeError(f"{type(artifact).__name__} is not a bearer token")

    def clear(self, response: Response) -> None:
        return None


def transport_for(mode: AuthMode, config: AuthConfig) -> ArtifactTransport:
    if mode is AuthMode.COOKIE:
        return CookieTransport(USER_ID_COOKIE, config)
    if mode is AuthMode.JWT:
        return BearerTransport()
    return CookieTransport(SESSION_COOKIE, config)
