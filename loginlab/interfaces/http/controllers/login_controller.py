# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, redirect, request
from pydantic import ValidationError

from loginlab.application.auth_service import AuthService
from loginlab.application.use_cases.users.register_user import SignupCommand
from loginlab.domain.auth.entities import (
    AccessLevel,
    AuthMode,
    Decision,
    SecurityContext,
    TokenArtifact,
)
from loginlab.domain.auth.exceptions import (
    BEARER_CHALLENGE,
    AccessDeniedError,
    AuthenticationRequiredError,
    TokenError,
)
from loginlab.domain.users.entities import User
from loginlab.domain.users.exceptions import (
    InvalidCredentialsError,
    SignupRejectedError,
    UserNotFoundError,
)
from loginlab.infrastructure.audit import AuditAction, audit_log
from loginlab.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    JoinRequestDTO,
    LoginRequestDTO,
    PrincipalViewDTO,
    UserViewDTO,
)
from loginlab.interfaces.http.transports import transport_for
from loginlab.shared.config import AuthConfig
from loginlab.shared.errors.validation import raise_validation_error
from loginlab.shared.logging import logger

_PAGE_NAMES = {
    AuthMode.COOKIE: "Cookie Login",
    AuthMode.SESSION: "Session Login",
    AuthMode.SECURITY: "Security Login",
    AuthMode.JWT: "JWT Login",
}


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _payload() -> dict:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _user_view(user: User) -> dict:
    return UserViewDTO(
        id=user.id, login_id=user.login_id, nickname=user.nickname, role=user.role.value
    ).model_dump(by_alias=True)


class LoginController:
    """HTTP adapter for one login mode.

    Every mode shares the same routes; only the artifact transport and the
    way a denied request is answered differ.
    """

    def __init__(self, *, mode: AuthMode, auth: AuthService, auth_config: AuthConfig) -> None:
        self._mode = mode
        self._auth = auth
        self._transport = transport_for(mode, auth_config)

    @property
    def mode(self) -> AuthMode:
        return self._mode

    @property
    def url_prefix(self) -> str:
        return f"/{self._mode.value}-login"

    def _page(self, **extra: object) -> dict:
        page: dict[str, object] = {
            "loginType": f"{self._mode.value}-login",
            "pageName": _PAGE_NAMES[self._mode],
        }
        page.update(extra)
        return page

    def _context(self) -> SecurityContext | None:
        if self._mode is not AuthMode.SECURITY:
            return None
        if "security_context" not in g:
            g.security_context = SecurityContext()
        return g.security_context

    def _current_user(self, *, lenient: bool = False) -> User | None:
        raw = self._transport.read(request)
        try:
            user = self._auth.resolve_principal(
                self._mode, raw, context=self._context(), lenient=lenient
            )
        except TokenError as exc:
            audit_log(
                AuditAction.TOKEN_REJECTED,
                ip_address=_get_client_ip(),
                details={"reason": exc.code, "path": request.path},
                success=False,
            )
            raise
        if user is not None:
            g.user_id = user.id
        return user

    def _deny(self, decision: Decision, user: User | None):
        audit_log(
            AuditAction.ACCESS_DENIED,
            user_id=user.id if user else None,
            ip_address=_get_client_ip(),
            details={"mode": self._mode.value, "path": request.path, "reason": decision.reason},
            success=False,
        )
        if self._mode in (AuthMode.COOKIE, AuthMode.SESSION):
            if decision.reason == "unauthenticated":
                return redirect(f"{self.url_prefix}/login")
            return redirect(self.url_prefix)
        if decision.reason == "unauthenticated":
            if self._mode is AuthMode.JWT:
                raise AuthenticationRequiredError(headers={"WWW-Authenticate": BEARER_CHALLENGE})
            raise AuthenticationRequiredError()
        raise AccessDeniedError(context={"required": AccessLevel.ADMIN.value})

    def home(self) -> tuple[Response, int]:
        user = self._current_user(lenient=True)
        page = self._page()
        if user is not None:
            page["nickname"] = user.nickname
        return jsonify(page), 200

    def join_page(self) -> tuple[Response, int]:
        return jsonify(self._page(fields=["loginId", "password", "passwordCheck", "nickname"])), 200

    def join(self) -> tuple[Response, int]:
        try:
            dto = JoinRequestDTO.model_validate(_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        command = SignupCommand(
            login_id=dto.login_id,
            password=dto.password,
            password_check=dto.password_check,
            nickname=dto.nickname,
        )
        try:
            user = self._auth.signup(command, self._mode)
        except SignupRejectedError as exc:
            audit_log(
                AuditAction.REGISTER_REJECTED,
                ip_address=_get_client_ip(),
                details={"login_id": dto.login_id, "fields": [v.field for v in exc.violations]},
                success=False,
            )
            raise

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=_get_client_ip(),
            details={"login_id": user.login_id, "mode": self._mode.value},
        )
        logger.info(f"auth.join: ok user_id={user.id} mode={self._mode.value}")
        return jsonify(self._page(user=_user_view(user))), 201

    def login_page(self) -> tuple[Response, int]:
        return jsonify(self._page(fields=["loginId", "password"])), 200

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()
        previous_key = self._transport.read(request) if self._mode.uses_server_session else None
        try:
            user, artifact = self._auth.login(
                dto.login_id,
                dto.password,
                self._mode,
                previous_key=previous_key,
                context=self._context(),
            )
        except InvalidCredentialsError:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"login_id": dto.login_id, "mode": self._mode.value},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=user.id,
            ip_address=ip_address,
            details={"login_id": user.login_id, "mode": self._mode.value},
        )
        g.user_id = user.id

        payload = AuthSuccessDTO(
            login_type=f"{self._mode.value}-login", nickname=user.nickname
        ).model_dump(by_alias=True)
        if isinstance(artifact, TokenArtifact):
            payload["token"] = artifact.token
            payload["tokenType"] = "Bearer"
            payload["expiresAt"] = artifact.expires_at.isoformat()

        response = jsonify(payload)
        self._transport.write(response, artifact)
        logger.info(f"auth.login: ok user_id={user.id} mode={self._mode.value}")
        return response, 200

    def _logout_subject(self, raw: str | None) -> User | None:
        # A stale artifact must not block logout
        try:
            return self._auth.resolve_principal(
                self._mode, raw, context=self._context(), lenient=True
            )
        except UserNotFoundError:
            return None

    def logout(self) -> tuple[Response, int]:
        raw = self._transport.read(request)
        user = self._logout_subject(raw)
        if user is not None:
            g.user_id = user.id
        outcome = self._auth.logout(self._mode, raw, context=self._context())

        audit_log(
            AuditAction.LOGOUT,
            user_id=user.id if user else None,
            ip_address=_get_client_ip(),
            details={"mode": self._mode.value, "invalidated": outcome.invalidated},
        )

        response = jsonify({"ok": True, "clearArtifact": outcome.clear_artifact})
        if outcome.clear_artifact:
            self._transport.clear(response)
        logger.info(f"auth.logout: ok mode={self._mode.value}")
        return response, 200

    def info(self):
        user = self._current_user()
        decision = self._auth.authorize(user, AccessLevel.AUTHENTICATED)
        if not decision:
            return self._deny(decision, user)

        page = self._page(user=_user_view(user))
        context = self._context()
        if context is not None and context.principal is not None:
            principal = context.principal
            page["principal"] = PrincipalViewDTO(
                id=principal.id,
                display_name=principal.display_name,
                role=principal.role.value,
                kind=principal.kind,
                authorities=list(context.authorities),
                attributes=dict(principal.raw_attributes),
            ).model_dump(by_alias=True)
        return jsonify(page), 200

    def admin(self):
        user = self._current_user()
        decision = self._auth.authorize(user, AccessLevel.ADMIN)
        if not decision:
            return self._deny(decision, user)
        return jsonify(self._page(nickname=user.nickname, admin=True)), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint(f"{self._mode.value}_login", __name__, url_prefix=self.url_prefix)
        bp.add_url_rule("/", view_func=self.home, methods=["GET"], strict_slashes=False)
        bp.add_url_rule("/join", view_func=self.join_page, methods=["GET"])
        bp.add_url_rule("/join", view_func=self.join, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login_page, methods=["GET"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["GET", "POST"])
        bp.add_url_rule("/info", view_func=self.info, methods=["GET"])
        bp.add_url_rule("/admin", view_func=self.admin, methods=["GET"])
        return bp
