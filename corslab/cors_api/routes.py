"""Evaluation and scenario endpoints."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from corslab.errors import NotFoundError
from corslab.evaluator import (
    RequestDescriptor,
    Scenario,
    ScenarioNotFoundError,
    ServerPolicy,
    compute_cors_outcome,
    get_scenario,
    list_scenarios,
)
from corslab.logging import evaluation_log_extra
from corslab.schemas import (
    ErrorMessageSchema,
    EvaluationRequestSchema,
    OutcomeSchema,
    ScenarioListSchema,
    ScenarioSchema,
)

from . import blp


def _evaluate(descriptor: RequestDescriptor, policy: ServerPolicy, *, source: str):
    outcome = compute_cors_outcome(descriptor, policy)
    if current_app.config.get("EVALUATION_LOGS_ENABLED", True):
        current_app.logger.info(
            "CORS outcome evaluated",
            extra=evaluation_log_extra(descriptor, outcome, source=source),
        )
    return outcome


def _serialize_scenario(scenario: Scenario) -> dict:
    return {
        "key": scenario.key,
        "title": scenario.title,
        "description": scenario.description,
        "request": scenario.request,
        "server": scenario.server,
        "outcome": compute_cors_outcome(scenario.request, scenario.server),
    }


@blp.route("/evaluate")
class CorsEvaluation(MethodView):
    @blp.arguments(EvaluationRequestSchema)
    @blp.response(200, OutcomeSchema())
    def post(self, payload):
        descriptor = RequestDescriptor(**payload["request"])
        policy = ServerPolicy(**payload["server"])
        return _evaluate(descriptor, policy, source="form")


@blp.route("/scenarios")
class ScenarioCollection(MethodView):
    @blp.response(200, ScenarioListSchema())
    def get(self):
        return {"scenarios": [_serialize_scenario(scenario) for scenario in list_scenarios()]}


@blp.route("/scenarios/<string:key>")
class ScenarioItem(MethodView):
    @blp.response(200, ScenarioSchema())
    @blp.alt_response(404, schema=ErrorMessageSchema())
    def get(self, key: str):
        try:
            scenario = get_scenario(key)
        except ScenarioNotFoundError as exc:
            raise NotFoundError(exc.args[0], payload={"key": key}) from exc
        return _serialize_scenario(scenario)
