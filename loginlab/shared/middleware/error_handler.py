# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from loginlab.shared.errors import (
    AppError,
    render_app_error,
    render_http_exception,
    render_internal_error,
)
from loginlab.shared.logging import logger


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def configure_error_handling(app: Flask, *, verbose: bool = False) -> None:
    """Answer every failure with ``{"error": code}``; tracebacks only when ``verbose``."""

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        logger.warning(f"request.error: {exc.code} status={int(exc.status)} {request.method} {request.path}")
        return render_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return render_http_exception(exc)

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if verbose:
            logger.exception(
                f"request.crash: {request.method} {request.path} from {_client_ip()} "
                f"query={dict(request.args)}"
            )
        else:
            logger.error(f"request.crash: {type(exc).__name__} on {request.method} {request.path}")
        return render_internal_error()
