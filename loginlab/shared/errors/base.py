# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    """Failure that maps onto one JSON error body.

    ``code`` is the stable machine-readable name, ``headers`` are extra
    response headers (``WWW-Authenticate`` for bearer failures).
    """

    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None
    headers: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Subclasses declare ``code``, ``status`` and optionally ``headers`` as class attributes."""

    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        # Read through the instance: an undeclared slot raises and falls back to the default
        super().__init__(
            code=code or cast(str, getattr(self, "code", "domain_error")),
            status=status or cast(HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)),
            context=context,
            headers=headers if headers is not None else getattr(self, "headers", None),
        )


class ValidationError(AppError):
    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(
            code="validation_error",
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context=context,
        )
