# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from loginlab.domain.auth.entities import AuthMode, SecurityContext
from loginlab.domain.auth.exceptions import InvalidSignatureError
from loginlab.domain.users.entities import User, as_principal
from loginlab.domain.users.exceptions import UserNotFoundError
from loginlab.domain.users.repositories import SessionStore, TokenSigner, UserRepository
from loginlab.shared.logging import logger

# Row ids are positive signed 64-bit integers in every supported database
_MAX_USER_ID = 2**63 - 1


class SessionResolver:
    """Turns an inbound raw artifact back into the user it was issued for.

    ``None`` means anonymous. Cookie ids that point at no user raise
    ``UserNotFoundError`` while a dangling server session is anonymous;
    token failures raise ``TokenError`` subclasses.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionStore,
        signer: TokenSigner,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._signer = signer

    def resolve(
        self,
        mode: AuthMode,
        raw: str | None,
        *,
        context: SecurityContext | None = None,
    ) -> User | None:
        if mode is AuthMode.COOKIE:
            return self._resolve_cookie(raw)
        if mode is AuthMode.JWT:
            return self._resolve_token(raw)

        user = self._resolve_session(raw)
        if mode is AuthMode.SECURITY and context is not None:
            if user is None:
                context.clear()
            else:
                context.authenticate(as_principal(user))
        return user

    def _resolve_cookie(self, raw: str | None) -> User | None:
        if not raw:
            return None
        try:
            user_id = int(raw)
        except ValueError:
            logger.debug("session.resolve: unparsable userId cookie, treating as anonymous")
            return None

        if not 0 < user_id <= _MAX_USER_ID:
            raise UserNotFoundError(context={"user_id": raw})
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(context={"user_id": user_id})
        return user

    def _resolve_session(self, key: str | None) -> User | None:
        if not key:
            return None
        session = self._sessions.touch(key)
        if session is None:
            return None

        user = self._users.find_by_id(session.user_id)
        if user is None:
            logger.warning(f"session.resolve: session refers to missing user={session.user_id}")
        return user

    def _resolve_token(self, token: str | None) -> User | None:
        if not token:
            return None
        claims = self._signer.verify(token)
        login_id = claims.get("loginId")
        if not isinstance(login_id, str) or not login_id:
            raise InvalidSignatureError(context={"reason": "missing_login_id"})
        return self._users.find_by_login_id(login_id)
