# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from functools import cached_property

from loginlab.application.auth_service import AuthService
from loginlab.application.services.credentials import CredentialVerifier
from loginlab.application.services.password_hashing import WerkzeugPasswordHasher
from loginlab.application.services.session_establisher import SessionEstablisher
from loginlab.application.services.session_resolver import SessionResolver
from loginlab.application.use_cases.users.login_user import LoginUserUseCase
from loginlab.application.use_cases.users.logout_user import LogoutUserUseCase
from loginlab.application.use_cases.users.register_user import RegisterUserUseCase
from loginlab.application.use_cases.users.resolve_principal import ResolvePrincipalUseCase
from loginlab.domain.auth.entities import AuthMode
from loginlab.domain.users.repositories import (
    PasswordHasher,
    SessionStore,
    TokenSigner,
    UserRepository,
)
from loginlab.infrastructure.sessions.memory_session_store import InMemorySessionStore
from loginlab.infrastructure.tokens.jwt_signer import PyJwtTokenSigner
from loginlab.interfaces.http.controllers.login_controller import LoginController
from loginlab.shared.config import AppConfig, load_config


class Container:
    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        users: UserRepository | None = None,
        sessions: SessionStore | None = None,
        signer: TokenSigner | None = None,
        password_hasher: PasswordHasher | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config or load_config()
        self._users = users
        self._sessions = sessions
        self._signer = signer
        self._password_hasher = password_hasher
        self._clock = clock

    @property
    def uses_database(self) -> bool:
        return self._users is None

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return self._password_hasher or WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> UserRepository:
        if self._users is not None:
            return self._users
        from loginlab.infrastructure.repositories.users.sqlalchemy_user_repository import (
            SqlAlchemyUserRepository,
        )

        return SqlAlchemyUserRepository()

    @cached_property
    def session_store(self) -> SessionStore:
        return self._sessions or InMemorySessionStore(clock=self._clock)

    @cached_property
    def token_signer(self) -> TokenSigner:
        return self._signer or PyJwtTokenSigner(self.config.auth.jwt_secret, clock=self._clock)

    @cached_property
    def credential_verifier(self) -> CredentialVerifier:
        return CredentialVerifier(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def session_establisher(self) -> SessionEstablisher:
        return SessionEstablisher(
            sessions=self.session_store,
            signer=self.token_signer,
            cookie_ttl=self.config.auth.cookie_ttl_seconds,
            session_ttl=self.config.auth.session_ttl_seconds,
            token_ttl=self.config.auth.jwt_ttl_seconds,
            clock=self._clock,
        )

    @cached_property
    def session_resolver(self) -> SessionResolver:
        return SessionResolver(
            users=self.user_repository, sessions=self.session_store, signer=self.token_signer
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            verifier=self.credential_verifier, establisher=self.session_establisher
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_store)

    @cached_property
    def resolve_principal_use_case(self) -> ResolvePrincipalUseCase:
        return ResolvePrincipalUseCase(resolver=self.session_resolver)

    @cached_property
    def auth_service(self) -> AuthService:
        return AuthService(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            resolve_use_case=self.resolve_principal_use_case,
        )

    @cached_property
    def login_controllers(self) -> list[LoginController]:
        return [
            LoginController(mode=mode, auth=self.auth_service, auth_config=self.config.auth)
            for mode in AuthMode
        ]
