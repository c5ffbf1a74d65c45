"""Blueprint exposing the CORS evaluator to the teaching form."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("CORS", __name__, description="CORS request evaluation endpoints")

from . import routes  # noqa: E402,F401
