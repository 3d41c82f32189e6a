# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from sqlalchemy.exc import SQLAlchemyError

from socialnet.infrastructure.db import Database
from socialnet.infrastructure.observability import render_metrics


class MiscController:
    def __init__(self, *, database: Database) -> None:
        self._database = database

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        bp.add_url_rule("/api/metrics", view_func=self.metrics, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            self._database.ping()
            status["database"] = "ok"
        except SQLAlchemyError as exc:
            status["ok"] = False
            status["database"] = f"error: {type(exc).__name__}"
        return jsonify(status), 200 if status["ok"] else 503

    def metrics(self) -> Response:
        body, content_type = render_metrics()
        return Response(body, content_type=content_type)
