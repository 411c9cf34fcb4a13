# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Single entry point over the login modes, used by the HTTP adapters."""

from __future__ import annotations

from loginlab.application.services.access_decision import authorize
from loginlab.application.use_cases.users.login_user import LoginUserUseCase
from loginlab.application.use_cases.users.logout_user import LogoutUserUseCase
from loginlab.application.use_cases.users.register_user import (
    RegisterUserUseCase,
    SignupCommand,
)
from loginlab.application.use_cases.users.resolve_principal import ResolvePrincipalUseCase
from loginlab.domain.auth.entities import (
    AccessLevel,
    AuthMode,
    Decision,
    LogoutOutcome,
    SecurityContext,
    SessionArtifact,
)
from loginlab.domain.users.entities import Principal, User


class AuthService:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        resolve_use_case: ResolvePrincipalUseCase,
    ) -> None:
        self._register = register_use_case
        self._login = login_use_case
        self._logout = logout_use_case
        self._resolve = resolve_use_case

    def signup(self, command: SignupCommand, mode: AuthMode) -> User:
        return self._register.execute(command, hash_password=mode.hashes_passwords)

    def login(
        self,
        login_id: str,
        password: str,
        mode: AuthMode,
        *,
        previous_key: str | None = None,
        context: SecurityContext | None = None,
    ) -> tuple[User, SessionArtifact]:
        return self._login.execute(
            login_id, password, mode, previous_key=previous_key, context=context
        )

    def resolve_principal(
        self,
        mode: AuthMode,
        raw: str | None,
        *,
        context: SecurityContext | None = None,
        lenient: bool = False,
    ) -> User | None:
        if lenient:
            return self._resolve.execute_lenient(mode, raw, context=context)
        return self._resolve.execute(mode, raw, context=context)

    def authorize(self, principal: User | Principal | None, level: AccessLevel) -> Decision:
        return authorize(principal, level)

    def logout(
        self,
        mode: AuthMode,
        raw: str | None,
        *,
        context: SecurityContext | None = None,
    ) -> LogoutOutcome:
        return self._logout.execute(mode, raw, context=context)
