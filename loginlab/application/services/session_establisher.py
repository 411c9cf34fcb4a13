# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from loginlab.domain.auth.entities import (
    AuthMode,
    CookieArtifact,
    SecurityContext,
    ServerSessionArtifact,
    SessionArtifact,
    TokenArtifact,
)
from loginlab.domain.users.entities import User, as_principal
from loginlab.domain.users.repositories import SessionStore, TokenSigner
from loginlab.shared.logging import logger


class SessionEstablisher:
    def __init__(
        self,
        *,
        sessions: SessionStore,
        signer: TokenSigner,
        cookie_ttl: int = 3600,
        session_ttl: int = 1800,
        token_ttl: int = 3600,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._sessions = sessions
        self._signer = signer
        self._cookie_ttl = cookie_ttl
        self._session_ttl = session_ttl
        self._token_ttl = token_ttl
        self._clock = clock or (lambda: datetime.now(UTC))

    def establish(
        self,
        user: User,
        mode: AuthMode,
        *,
        previous_key: str | None = None,
        context: SecurityContext | None = None,
    ) -> SessionArtifact:
        if mode is AuthMode.COOKIE:
            return CookieArtifact(value=str(user.id), max_age=self._cookie_ttl)

        if mode is AuthMode.JWT:
            return self._issue_token(user)

        # Server-side session: drop whatever the client came in with first
        if previous_key:
            self._sessions.invalidate(previous_key)
        session = self._sessions.create(user.id, self._session_ttl)
        logger.debug(
            f"session.establish: user={user.id} mode={mode.value} exp={session.expires_at.isoformat()}"
        )

        if mode is AuthMode.SECURITY and context is not None:
            context.authenticate(as_principal(user))
        return ServerSessionArtifact(session=session)

    def _issue_token(self, user: User) -> TokenArtifact:
        issued_at = self._clock()
        ttl = timedelta(seconds=self._token_ttl)
        token = self._signer.sign({"loginId": user.login_id}, ttl)
        logger.debug(f"session.establish: issued token for user={user.id} ttl={self._token_ttl}s")
        return TokenArtifact(
            token=token,
            login_id=user.login_id,
            issued_at=issued_at,
            expires_at=issued_at + ttl,
        )
