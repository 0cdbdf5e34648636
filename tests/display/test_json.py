"""Tests for display/json.py."""

from __future__ import annotations

import json

from gtokenchecker.display.json import outcome_to_dict
from gtokenchecker.display.json import outcomes_to_dict
from gtokenchecker.display.json import output_json_error
from gtokenchecker.display.json import output_json_pretty
from gtokenchecker.errors.types import RateLimited
from gtokenchecker.errors.types import TransportFailure
from gtokenchecker.errors.types import TransportKind
from gtokenchecker.errors.types import Unauthorized
from gtokenchecker.models import CheckAttempt
from gtokenchecker.models import CheckOutcome
from gtokenchecker.models import TokenResult


class TestOutcomeToDict:
    """Tests for outcome_to_dict."""

    def test_valid(self, token, token_info):
        outcome = CheckOutcome(
            index=0,
            token=token,
            result=TokenResult(token=token, info=token_info),
            attempts=[CheckAttempt(number=1, duration_ms=12)],
        )

        data = outcome_to_dict(outcome)

        assert data["status"] == "valid"
        assert data["result"]["info"]["username"] == "nelly"
        assert data["result"]["nitro_credits"] == {"classic": 0, "boost": 0}
        assert data["attempts"] == [{"number": 1, "error": None, "duration_ms": 12}]
        assert "error" not in data

    def test_mask_applies_everywhere(self, token, token_info):
        outcome = CheckOutcome(
            index=0, token=token, result=TokenResult(token=token, info=token_info)
        )

        encoded = json.dumps(outcome_to_dict(outcome, mask=True))

        assert token not in encoded

    def test_invalid(self, token):
        outcome = CheckOutcome(
            index=2,
            token=token,
            error=Unauthorized(code=0, message="401: Unauthorized"),
            attempts=[CheckAttempt(number=1, error="Unauthorized (0): 401: Unauthorized")],
        )

        data = outcome_to_dict(outcome)

        assert data["index"] == 2
        assert data["status"] == "invalid"
        assert data["error"]["category"] == "authentication"
        assert data["error"]["kind"] == "Unauthorized"
        assert data["error"]["details"]["message"] == "401: Unauthorized"
        assert "result" not in data

    def test_transport_failure_is_error(self, token):
        outcome = CheckOutcome(
            index=0, token=token, error=TransportFailure(kind=TransportKind.TIMEOUT)
        )

        data = outcome_to_dict(outcome)

        assert data["status"] == "error"
        assert data["error"]["severity"] == "transient"


def test_outcomes_to_dict_summary(token, token_info):
    outcomes = [
        CheckOutcome(index=0, token=token, result=TokenResult(token=token, info=token_info)),
        CheckOutcome(index=1, token="a.b.c", error=Unauthorized()),
        CheckOutcome(index=2, token="d.e.f", error=TransportFailure(kind=TransportKind.CONNECT)),
    ]

    data = outcomes_to_dict(outcomes)

    assert data["summary"] == {"total": 3, "valid": 1, "invalid": 1, "error": 1}
    assert [t["index"] for t in data["tokens"]] == [0, 1, 2]


def test_output_json_pretty(capsys):
    output_json_pretty({"a": [1, 2]})

    assert json.loads(capsys.readouterr().out) == {"a": [1, 2]}


def test_output_json_error(capsys):
    output_json_error("No token given", category="input")

    data = json.loads(capsys.readouterr().out)
    assert data["error"]["message"] == "No token given"
    assert data["error"]["category"] == "input"


def test_remediation_has_no_markup(token):
    outcome = CheckOutcome(index=0, token=token, error=RateLimited())

    remediation = outcome_to_dict(outcome)["error"]["remediation"]

    assert remediation == "Wait a few minutes or raise --rate-limit-delay."
