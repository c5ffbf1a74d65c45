"""Route handlers for health checks."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from corslab.schemas import HealthStatusSchema

from . import blp


@blp.route("")
class HealthStatus(MethodView):
    @blp.response(200, HealthStatusSchema())
    def get(self):
        return {
            "status": "ok",
            "app": current_app.config.get("APP_NAME", "corslab"),
        }
