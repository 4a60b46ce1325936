"""
Gatekeeper API Client

Responsibilities:
- POST the canonical AnalysisRequest to the analysis engine
- Authenticate with the X-API-KEY header
- Parse the verdict body, surfacing any failure as ForwardingError

The POST is sent exactly once. Retrying could trigger duplicate analyses.
"""

import asyncio
import logging
from typing import Optional

import requests
from pydantic import ValidationError

from app.config import Settings
from app.models.analysis import AnalysisRequest, Verdict

logger = logging.getLogger(__name__)


class ForwardingError(RuntimeError):
    """Raised when the analysis engine cannot produce a usable verdict."""


class AnalysisForwarder:
    """Sends analysis requests to the gatekeeper engine."""

    def __init__(
        self,
        url: str,
        api_key: str = "",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalysisForwarder":
        return cls(
            url=settings.gatekeeper_url,
            api_key=settings.gatekeeper_api_key,
            timeout=settings.forward_timeout,
        )

    async def forward(self, request: AnalysisRequest) -> Verdict:
        """Forward without blocking the event loop."""
        return await asyncio.to_thread(self.send, request)

    def send(self, request: AnalysisRequest) -> Verdict:
        """
        POST a request and return the parsed verdict.

        Raises:
            ForwardingError: on transport failure, a non-JSON body, or a body
                that is not a verdict object
        """
        logger.info(
            f"Analyzing PR #{request.pr_number} from {request.author} in {request.repository}"
        )
        headers = {"Content-Type": "application/json", "X-API-KEY": self.api_key}

        try:
            resp = self.session.post(
                self.url,
                json=request.to_payload(),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Failed to reach gatekeeper at {self.url}: {e}")
            raise ForwardingError(f"Failed to reach gatekeeper at {self.url}: {e}") from e

        if not resp.ok:
            logger.warning(f"Gatekeeper responded with HTTP {resp.status_code}")

        try:
            body = resp.json()
        except ValueError as e:
            raise ForwardingError(
                f"Gatekeeper returned a non-JSON response (HTTP {resp.status_code})"
            ) from e

        if not isinstance(body, dict):
            raise ForwardingError(
                f"Gatekeeper returned {type(body).__name__} instead of a verdict object"
            )

        try:
            verdict = Verdict.model_validate(body)
        except ValidationError as e:
            raise ForwardingError(f"Gatekeeper returned an invalid verdict: {e}") from e

        logger.info(f"Gatekeeper response: {verdict.decision.value} (risk={verdict.risk_score})")
        return verdict
