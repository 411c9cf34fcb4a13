# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import Enum
from typing import Any

from loginlab.shared.logging import logger

_REDACTED = "***REDACTED***"
# Detail keys that may carry a credential or a login artifact
_SECRET_KEY_PARTS = ("password", "token", "secret", "cookie", "session")


class AuditAction(str, Enum):
    REGISTER = "register"
    REGISTER_REJECTED = "register_rejected"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    ACCESS_DENIED = "access_denied"
    TOKEN_REJECTED = "token_rejected"


def redact_details(details: dict[str, Any]) -> dict[str, Any]:
    return {
        key: _REDACTED if any(part in key.lower() for part in _SECRET_KEY_PARTS) else value
        for key, value in details.items()
    }


def audit_log(
    action: AuditAction,
    *,
    user_id: int | None = None,
    ip_address: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    """One line per security-relevant event, tagged ``audit`` in the record extras.

    Failures go out at WARNING so they survive an INFO-filtered sink.
    """
    fields = [f"user_id={user_id}", f"ip={ip_address}"]
    fields += [f"{key}={value}" for key, value in sorted(redact_details(details or {}).items())]
    outcome = "ok" if success else "fail"

    logger.bind(audit=action.value).log(
        "INFO" if success else "WARNING",
        f"audit.{action.value}: {outcome} " + " ".join(fields),
    )


__all__ = ["AuditAction", "audit_log", "redact_details"]
