"""CLI command for evaluating a CORS request from the terminal."""

from __future__ import annotations

import json

import click
from flask import current_app
from flask.cli import with_appcontext

from corslab.evaluator import (
    RequestDescriptor,
    ScenarioNotFoundError,
    ServerPolicy,
    compute_cors_outcome,
    get_scenario,
)
from corslab.logging import evaluation_log_extra
from corslab.schemas import OutcomeSchema


@click.command("evaluate-cors")
@click.option("--scenario", "scenario_key", default=None, help="Evaluate a built-in scenario by key")
@click.option("--origin", default="", help="Origin of the requesting page")
@click.option("--method", default="GET", show_default=True, help="HTTP method of the request")
@click.option("--with-credentials", is_flag=True, help="Send cookies or HTTP auth")
@click.option("--request-headers", default="", help="Comma-separated request header names")
@click.option("--content-type", default="", help="Content type of the request body")
@click.option("--allow-origins", default="", help="Comma-separated allowed origins, or '*'")
@click.option("--allow-methods", default="", help="Comma-separated allowed methods")
@click.option("--allow-headers", default="", help="Comma-separated allowed headers")
@click.option("--allow-credentials", is_flag=True, help="Server allows credentials")
@with_appcontext
def evaluate_cors(
    scenario_key: str | None,
    origin: str,
    method: str,
    with_credentials: bool,
    request_headers: str,
    content_type: str,
    allow_origins: str,
    allow_methods: str,
    allow_headers: str,
    allow_credentials: bool,
) -> None:
    """Print the CORS outcome for a request and server policy as JSON."""

    if scenario_key:
        try:
            scenario = get_scenario(scenario_key)
        except ScenarioNotFoundError as exc:
            raise click.BadParameter(exc.args[0], param_hint="--scenario") from exc
        descriptor, policy = scenario.request, scenario.server
    else:
        descriptor = RequestDescriptor(
            origin=origin,
            method=method,
            with_credentials=with_credentials,
            request_headers=request_headers,
            content_type=content_type,
        )
        policy = ServerPolicy(
            allow_origins=allow_origins,
            allow_methods=allow_methods,
            allow_headers=allow_headers,
            allow_credentials=allow_credentials,
        )

    outcome = compute_cors_outcome(descriptor, policy)
    if current_app.config.get("EVALUATION_LOGS_ENABLED", True):
        current_app.logger.info(
            "CORS outcome evaluated",
            extra=evaluation_log_extra(descriptor, outcome, source="cli"),
        )
    click.echo(json.dumps(OutcomeSchema().dump(outcome), indent=2, sort_keys=True))
