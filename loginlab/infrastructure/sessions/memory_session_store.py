# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime, timedelta

from loginlab.domain.auth.entities import ServerSession
from loginlab.domain.users.repositories import SessionStore
from loginlab.shared.logging import logger


class InMemorySessionStore(SessionStore):
    """Process-local session registry keyed by an unguessable id.

    Not synchronized: concurrent invalidate/touch on one key is last-writer-wins.
    Expired entries are swept from ``create`` at most once per ``sweep_interval``
    seconds, so abandoned sessions do not accumulate.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] | None = None,
        sweep_interval: int = 60,
    ) -> None:
        self._sessions: dict[str, ServerSession] = {}
        self._clock = clock or (lambda: datetime.now(UTC))
        self._sweep_interval = timedelta(seconds=sweep_interval)
        self._next_sweep: datetime | None = None

    def create(self, user_id: int, max_inactive: int) -> ServerSession:
        now = self._clock()
        if self._next_sweep is None or now >= self._next_sweep:
            self._next_sweep = now + self._sweep_interval
            swept = self.purge_expired()
            if swept:
                logger.debug(f"session.store: swept {swept} expired sessions")
        key = secrets.token_urlsafe(32)
        session = ServerSession(
            key=key,
            user_id=user_id,
            expires_at=now + timedelta(seconds=max_inactive),
            max_inactive=max_inactive,
        )
        self._sessions[key] = session
        return session

    def get(self, key: str) -> ServerSession | None:
        session = self._sessions.get(key)
        if session is None:
            return None
        if session.expires_at <= self._clock():
            self._sessions.pop(key, None)
            logger.debug(f"session.store: expired session for user={session.user_id}")
            return None
        return session

    def touch(self, key: str) -> ServerSession | None:
        session = self.get(key)
        if session is None:
            return None
        refreshed = replace(
            session, expires_at=self._clock() + timedelta(seconds=session.max_inactive)
        )
        self._sessions[key] = refreshed
        return refreshed

    def invalidate(self, key: str) -> bool:
        return self._sessions.pop(key, None) is not None

    def purge_expired(self) -> int:
        now = self._clock()
        stale = [key for key, s in self._sessions.items() if s.expires_at <= now]
        for key in stale:
            self._sessions.pop(key, None)
        return len(stale)

    def __len__(self) -> int:
        return len(self._sessions)
