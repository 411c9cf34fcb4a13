from __future__ import annotations

import pytest

from loginlab.application.auth_service import AuthService
from loginlab.application.services.credentials import CredentialVerifier
from loginlab.application.services.session_establisher import SessionEstablisher
from loginlab.application.services.session_resolver import SessionResolver
from loginlab.application.use_cases.users.login_user import LoginUserUseCase
from loginlab.application.use_cases.users.logout_user import LogoutUserUseCase
from loginlab.application.use_cases.users.register_user import (
    RegisterUserUseCase,
    SignupCommand,
)
from loginlab.application.use_cases.users.resolve_principal import ResolvePrincipalUseCase
from loginlab.domain.auth.entities import AccessLevel, AuthMode, ServerSessionArtifact
from loginlab.domain.users.entities import UserRole
from loginlab.domain.users.exceptions import (
    DuplicateLoginIdError,
    DuplicateNicknameError,
    InvalidCredentialsError,
    PasswordConfirmationMismatchError,
    SignupRejectedError,
)


@pytest.fixture()
def service(users, hasher, sessions, signer, clock) -> AuthService:
    establisher = SessionEstablisher(sessions=sessions, signer=signer, clock=clock)
    return AuthService(
        register_use_case=RegisterUserUseCase(users=users, password_hasher=hasher),
        login_use_case=LoginUserUseCase(
            verifier=CredentialVerifier(users=users, password_hasher=hasher),
            establisher=establisher,
        ),
        logout_use_case=LogoutUserUseCase(sessions=sessions),
        resolve_use_case=ResolvePrincipalUseCase(
            resolver=SessionResolver(users=users, sessions=sessions, signer=signer)
        ),
    )


def _signup(login_id="alice", password="pw1", check=None, nickname="Alice") -> SignupCommand:
    return SignupCommand(
        login_id=login_id,
        password=password,
        password_check=password if check is None else check,
        nickname=nickname,
    )


def test_signup_plain_mode_stores_password_as_is(service, users) -> None:
    user = service.signup(_signup(), AuthMode.COOKIE)

    assert user.id == 1
    assert user.role is UserRole.USER
    assert user.password == "pw1"
    assert user.password_hashed is False


def test_signup_hashing_mode_stores_hash(service, users) -> None:
    user = service.signup(_signup(), AuthMode.JWT)

    assert user.password == "hashed:pw1"
    assert user.password_hashed is True


def test_signup_duplicate_login_id_is_rejected_without_insert(service, users) -> None:
    service.signup(_signup(), AuthMode.COOKIE)

    with pytest.raises(SignupRejectedError) as excinfo:
        service.signup(_signup(nickname="Other"), AuthMode.COOKIE)

    assert [type(v) for v in excinfo.value.violations] == [DuplicateLoginIdError]
    assert excinfo.value.context["fields"] == ["loginId"]
    assert users.saved == 1


def test_signup_reports_every_violation_together(service, users) -> None:
    service.signup(_signup(), AuthMode.COOKIE)

    with pytest.raises(SignupRejectedError) as excinfo:
        service.signup(_signup(check="nope"), AuthMode.COOKIE)

    assert [type(v) for v in excinfo.value.violations] == [
        DuplicateLoginIdError,
        DuplicateNicknameError,
        PasswordConfirmationMismatchError,
    ]
    assert excinfo.value.to_dict()["error"] == "signup_rejected"
    assert users.saved == 1


@pytest.mark.parametrize(("login_id", "password"), [("alice", "wrong"), ("nobody", "pw1")])
def test_login_failures_collapse_to_invalid_credentials(service, login_id, password) -> None:
    service.signup(_signup(), AuthMode.SESSION)

    with pytest.raises(InvalidCredentialsError):
        service.login(login_id, password, AuthMode.SESSION)


def test_alice_session_scenario(service) -> None:
    service.signup(_signup(), AuthMode.SESSION)

    user, artifact = service.login("alice", "pw1", AuthMode.SESSION)
    assert isinstance(artifact, ServerSessionArtifact)
    with pytest.raises(InvalidCredentialsError):
        service.login("alice", "wrong", AuthMode.SESSION)

    assert service.resolve_principal(AuthMode.SESSION, artifact.key) == user

    outcome = service.logout(AuthMode.SESSION, artifact.key)
    assert outcome.invalidated is True
    assert outcome.clear_artifact is True
    assert service.resolve_principal(AuthMode.SESSION, artifact.key) is None


def test_user_session_is_denied_admin_area(service) -> None:
    service.signup(_signup(), AuthMode.SESSION)
    _, artifact = service.login("alice", "pw1", AuthMode.SESSION)

    principal = service.resolve_principal(AuthMode.SESSION, artifact.key)
    decision = service.authorize(principal, AccessLevel.ADMIN)

    assert not decision
    assert decision.reason == "forbidden"
    assert service.authorize(principal, AccessLevel.AUTHENTICATED)


@pytest.mark.parametrize("mode", [AuthMode.COOKIE, AuthMode.JWT])
def test_stateless_logout_only_asks_client_to_clear(service, mode) -> None:
    outcome = service.logout(mode, "whatever")
    assert outcome.clear_artifact is True
    assert outcome.invalidated is False


def test_lenient_resolution_treats_bad_token_as_anonymous(service) -> None:
    assert service.resolve_principal(AuthMode.JWT, "junk.token.value", lenient=True) is None
