# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from loginlab.application.services.credentials import CredentialVerifier
from loginlab.application.services.session_establisher import SessionEstablisher
from loginlab.domain.auth.entities import AuthMode, SecurityContext, SessionArtifact
from loginlab.domain.users.entities import User
from loginlab.domain.users.exceptions import (
    CredentialMismatchError,
    InvalidCredentialsError,
    UserNotFoundError,
)


class LoginUserUseCase:
    def __init__(
        self,
        *,
        verifier: CredentialVerifier,
        establisher: SessionEstablisher,
    ) -> None:
        self._verifier = verifier
        self._establisher = establisher

    def execute(
        self,
        login_id: str,
        password: str,
        mode: AuthMode,
        *,
        previous_key: str | None = None,
        context: SecurityContext | None = None,
    ) -> tuple[User, SessionArtifact]:
        try:
            user = self._verifier.verify(login_id, password)
        except (UserNotFoundError, CredentialMismatchError) as exc:
            raise InvalidCredentialsError() from exc

        artifact = self._establisher.establish(
            user, mode, previous_key=previous_key, context=context
        )
        return user, artifact
