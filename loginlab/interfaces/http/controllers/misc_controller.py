# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify

from loginlab.domain.auth.entities import AuthMode


class MiscController:
    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/healthz", view_func=self.health, methods=["GET"])
        bp.add_url_rule("/", view_func=self.index, methods=["GET"])
        return bp

    def health(self):
        return jsonify({"status": "ok"})

    def index(self):
        return jsonify({"modes": [f"/{mode.value}-login" for mode in AuthMode]})
