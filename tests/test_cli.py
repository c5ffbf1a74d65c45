from __future__ import annotations

import json

from corslab.cli.evaluate import evaluate_cors


def test_evaluate_cors_prints_outcome(cli_runner):
    result = cli_runner.invoke(
        evaluate_cors,
        [
            "--origin",
            "https://a.com",
            "--method",
            "PUT",
            "--allow-origins",
            "https://a.com",
            "--allow-methods",
            "get,post",
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["needsPreflight"] is True
    assert payload["preflight"] == {"needed": True, "allowed": False}
    assert payload["actual"]["allowed"] is False
    assert payload["reasons"] == ["Preflight would fail"]


def test_evaluate_cors_with_credentials_flags(cli_runner):
    result = cli_runner.invoke(
        evaluate_cors,
        [
            "--origin",
            "https://a.com",
            "--with-credentials",
            "--allow-origins",
            "https://a.com",
            "--allow-credentials",
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["actual"]["allowed"] is True
    assert payload["responseHeaders"]["access-control-allow-credentials"] == "true"


def test_evaluate_cors_runs_named_scenario(cli_runner):
    result = cli_runner.invoke(evaluate_cors, ["--scenario", "wildcard-with-credentials"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["actual"]["allowed"] is False
    assert payload["reasons"] == ["Invalid: allow-origin '*' cannot be used with credentials"]


def test_evaluate_cors_rejects_unknown_scenario(cli_runner):
    result = cli_runner.invoke(evaluate_cors, ["--scenario", "missing"])

    assert result.exit_code == 2
    assert "Unknown scenario 'missing'" in result.output


def test_evaluate_cors_is_registered(app):
    assert "evaluate-cors" in app.cli.commands
