"""Use-case for ending a login session."""

from __future__ import annotations

from loginlab.domain.auth.entities import AuthMode, LogoutOutcome, SecurityContext
from loginlab.domain.users.repositories import SessionStore


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionStore) -> None:
        self._sessions = sessions

    def execute(
        self,
        mode: AuthMode,
        raw: str | None,
        *,
        context: SecurityContext | None = None,
    ) -> LogoutOutcome:
        if context is not None:
            context.clear()
        if not mode.uses_server_session:
            return LogoutOutcome(clear_artifact=True)

        invalidated = bool(raw) and self._sessions.invalidate(raw)
        return LogoutOutcome(clear_artifact=True, invalidated=invalidated)
