# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Response, jsonify
from werkzeug.exceptions import HTTPException

from .base import AppError


def render_app_error(error: AppError) -> Response:
    response = jsonify(error.to_dict())
    response.status_code = int(error.status)
    for name, value in (error.headers or {}).items():
        response.headers[name] = value
    return response


def render_http_exception(exc: HTTPException) -> Response:
    # 404/405 from routing share the JSON error shape
    code = (exc.name or "http_error").lower().replace(" ", "_")
    response = jsonify({"error": code})
    response.status_code = exc.code or 500
    return response


def render_internal_error() -> Response:
    response = jsonify({"error": "internal_error"})
    response.status_code = 500
    return response
