# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from loginlab.application.services.session_resolver import SessionResolver
from loginlab.domain.auth.entities import AuthMode, SecurityContext
from loginlab.domain.auth.exceptions import TokenError
from loginlab.domain.users.entities import User
from loginlab.shared.logging import logger


class ResolvePrincipalUseCase:
    def __init__(self, *, resolver: SessionResolver) -> None:
        self._resolver = resolver

    def execute(
        self,
        mode: AuthMode,
        raw: str | None,
        *,
        context: SecurityContext | None = None,
    ) -> User | None:
        return self._resolver.resolve(mode, raw, context=context)

    def execute_lenient(
        self,
        mode: AuthMode,
        raw: str | None,
        *,
        context: SecurityContext | None = None,
    ) -> User | None:
        """Like ``execute`` but a rejected token reads as anonymous."""
        try:
            return self._resolver.resolve(mode, raw, context=context)
        except TokenError as exc:
            logger.info(f"auth.resolve: rejected token ({exc.code}), continuing anonymous")
            return None
