from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError
from .request_parsing import bearer_token, parse_flask_request
from .router import Envelope

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    router = container.router

    def _respond(envelope: Envelope):
        return jsonify(envelope.body), envelope.status

    @app.route("/api", methods=["GET", "POST"], endpoint="api")
    @app.route("/exec", methods=["GET", "POST"], endpoint="exec")
    def api():
        try:
            data = parse_flask_request(request)
        except ValidationError as e:
            return _respond(Envelope({"success": False, "error": str(e)}, 400))

        bearer = bearer_token(request.headers)
        if request.method == "GET":
            return _respond(router.handle_read(data, bearer=bearer))
        return _respond(router.handle_write(data, bearer=bearer))

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"success": True, "status": "ok"})
