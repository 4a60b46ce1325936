"""
Tests for the gatekeeper forwarding client.
"""

import asyncio
from unittest.mock import MagicMock

import pytest
import requests

from app.config import Settings
from app.integrations.gatekeeper import AnalysisForwarder, ForwardingError
from app.models.analysis import AnalysisRequest, Decision

GATEKEEPER_URL = "http://gatekeeper.test/api/analyze"

VERDICT_BODY = {
    "prNumber": "42",
    "riskScore": 0.82,
    "riskLevel": "HIGH",
    "decision": "BLOCK",
    "prStatus": "BLOCKED - Manual review required before merge",
    "missingTests": ["Unit tests for new/changed public methods (1 found)"],
    "suggestedTests": [],
    "summary": "PR #42 by alice",
    "explanation": "Dangerous keywords found",
    "suggestionCode": "BLOCK_DANGEROUS_EXEC",
    "spellingSuggestions": [],
    "groqSuggestion": None,
    "errorMessage": None,
    "analysisTimestamp": 1700000000000,
}


def make_response(body=None, status_code=200, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


@pytest.fixture()
def session():
    session = MagicMock()
    session.post.return_value = make_response(VERDICT_BODY)
    return session


@pytest.fixture()
def forwarder(session):
    return AnalysisForwarder(GATEKEEPER_URL, api_key="secret-key", timeout=5, session=session)


@pytest.fixture()
def analysis_request():
    return AnalysisRequest(
        pr_number="42",
        author="alice",
        repository="octo/repo",
        changed_files=["3 files changed"],
        diff="+Runtime.getRuntime().exec(cmd)",
    )


class TestAnalysisForwarder:
    """Test suite for AnalysisForwarder."""

    def test_posts_camel_case_payload_with_api_key(self, forwarder, session, analysis_request):
        """The canonical request is sent as camelCase JSON with X-API-KEY."""
        forwarder.send(analysis_request)

        session.post.assert_called_once()
        assert session.post.call_args.args[0] == GATEKEEPER_URL
        assert session.post.call_args.kwargs["json"] == {
            "prNumber": "42",
            "author": "alice",
            "repository": "octo/repo",
            "changedFiles": ["3 files changed"],
            "diff": "+Runtime.getRuntime().exec(cmd)",
        }
        assert session.post.call_args.kwargs["headers"]["X-API-KEY"] == "secret-key"
        assert session.post.call_args.kwargs["timeout"] == 5

    def test_parses_verdict(self, forwarder, analysis_request):
        verdict = asyncio.run(forwarder.forward(analysis_request))

        assert verdict.decision == Decision.BLOCK
        assert verdict.risk_score == 0.82
        assert verdict.suggestion_code == "BLOCK_DANGEROUS_EXEC"
        assert verdict.missing_tests == ["Unit tests for new/changed public methods (1 found)"]
        assert verdict.pr_status.startswith("BLOCKED")
        assert verdict.analysis_timestamp == 1700000000000

    def test_unknown_fields_are_kept(self, forwarder, session, analysis_request):
        session.post.return_value = make_response({**VERDICT_BODY, "modelVersion": "v2"})

        verdict = forwarder.send(analysis_request)

        assert verdict.model_dump(by_alias=True)["modelVersion"] == "v2"

    def test_transport_error(self, forwarder, session, analysis_request):
        """Connection failures become ForwardingError with a message."""
        session.post.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(ForwardingError) as exc_info:
            forwarder.send(analysis_request)

        assert "connection refused" in str(exc_info.value)
        assert session.post.call_count == 1

    def test_non_json_response(self, forwarder, session, analysis_request):
        session.post.return_value = make_response(
            status_code=401, json_error=ValueError("Expecting value")
        )

        with pytest.raises(ForwardingError, match="non-JSON"):
            forwarder.send(analysis_request)

    def test_non_object_response(self, forwarder, session, analysis_request):
        session.post.return_value = make_response(["not", "a", "verdict"])

        with pytest.raises(ForwardingError):
            forwarder.send(analysis_request)

    def test_error_status_with_json_body_is_a_verdict(self, forwarder, session, analysis_request):
        """Non-2xx JSON objects are passed through as verdicts."""
        session.post.return_value = make_response(
            {"decision": "UNKNOWN", "errorMessage": "engine overloaded"}, status_code=503
        )

        verdict = forwarder.send(analysis_request)

        assert verdict.decision == Decision.UNKNOWN
        assert verdict.error_message == "engine overloaded"

    def test_lenient_verdict_fields(self, forwarder, session, analysis_request):
        """Odd values decode to defaults instead of failing."""
        session.post.return_value = make_response(
            {"decision": "maybe", "riskScore": "-", "missingTests": None, "summary": None}
        )

        verdict = forwarder.send(analysis_request)

        assert verdict.decision == Decision.UNKNOWN
        assert verdict.risk_score is None
        assert verdict.missing_tests == []
        assert verdict.summary == ""

    def test_odd_optional_fields_do_not_reject_verdict(self, forwarder, session, analysis_request):
        """A verdict with unparseable optional fields is still accepted."""
        session.post.return_value = make_response(
            {
                "decision": "ALLOW",
                "riskScore": 0.1,
                "analysisTimestamp": {"at": "n/a"},
                "suggestionCode": 7,
                "groqSuggestion": ["x"],
                "errorMessage": {"code": 1},
                "prStatus": False,
            }
        )

        verdict = forwarder.send(analysis_request)

        assert verdict.decision == Decision.ALLOW
        assert verdict.analysis_timestamp is None
        assert verdict.suggestion_code is None
        assert verdict.groq_suggestion is None
        assert verdict.error_message is None
        assert verdict.pr_status is None

    def test_timestamp_echoed_as_received(self, forwarder, session, analysis_request):
        """Engine timestamps are passed back unchanged, not reformatted."""
        session.post.return_value = make_response({**VERDICT_BODY, "analysisTimestamp": "n/a"})
        assert forwarder.send(analysis_request).model_dump(by_alias=True)["analysisTimestamp"] == "n/a"

        session.post.return_value = make_response(VERDICT_BODY)
        dumped = forwarder.send(analysis_request).model_dump(mode="json", by_alias=True)
        assert dumped["analysisTimestamp"] == 1700000000000

    def test_from_settings(self):
        forwarder = AnalysisForwarder.from_settings(
            Settings(gatekeeper_url=GATEKEEPER_URL, gatekeeper_api_key="", forward_timeout=12)
        )

        assert forwarder.url == GATEKEEPER_URL
        assert forwarder.api_key == ""
        assert forwarder.timeout == 12
