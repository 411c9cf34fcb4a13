# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, g, request

from loginlab.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

# Headers that carry a login artifact; logged only as a short fingerprint
_ARTIFACT_HEADERS = frozenset({"authorization", "cookie"})


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _loggable_headers() -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in _ARTIFACT_HEADERS else value
        for key, value in request.headers.items()
    }


def configure_request_logging(app: Flask, *, verbose: bool = False) -> None:
    """Correlation id per request plus one start and one end line.

    With ``verbose`` the start line also lists headers, artifact headers
    replaced by fingerprints so two requests with the same cookie can still
    be matched up.
    """

    @app.before_request
    def _before_request() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8))
        g.request_started = time.perf_counter()
        if verbose:
            logger.debug(
                f"http.start: {request.method} {request.path} from {_client_ip()} "
                f"headers={_loggable_headers()}"
            )
        else:
            logger.info(f"http.start: {request.method} {request.path} from {_client_ip()}")

    @app.after_request
    def _after_request(response):
        elapsed = time.perf_counter() - g.get("request_started", time.perf_counter())
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        logger.info(
            f"http.end: {request.method} {request.path} status={response.status_code} "
            f"duration={elapsed:.3f}s user_id={g.get('user_id')}"
        )
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"http.abort: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
