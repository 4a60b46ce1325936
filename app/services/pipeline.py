"""
Webhook Analysis Pipeline

Full pipeline orchestration:
Webhook payload -> Normalization -> GitHub enrichment -> Gatekeeper -> Results window
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from app.integrations.gatekeeper import AnalysisForwarder
from app.integrations.github import EnrichmentProvider, EnrichmentResult
from app.models.analysis import AnalysisRequest, BufferedAnalysis
from app.models.webhook import WebhookEvent
from app.services.normalizer import normalize_event
from app.services.result_buffer import ResultBuffer

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Result of the full pipeline execution."""

    success: bool
    record: Optional[BufferedAnalysis] = None
    error: Optional[str] = None


def apply_enrichment(request: AnalysisRequest, enrichment: EnrichmentResult) -> AnalysisRequest:
    """Overwrite webhook defaults with whatever enrichment produced."""
    if enrichment.is_empty:
        return request
    update = {}
    if enrichment.diff is not None:
        update["diff"] = enrichment.diff
    if enrichment.changed_files is not None:
        update["changed_files"] = enrichment.changed_files
    return request.model_copy(update=update)


class WebhookPipeline:
    """
    Orchestrates one webhook delivery.

    Pipeline steps:
    1. Decode and normalize the payload
    2. Enrich with GitHub diff/metadata (best effort)
    3. Forward to the gatekeeper engine
    4. Append the completed analysis to the results window

    The results window is only touched once a verdict was obtained, so a
    failed delivery leaves it unchanged.
    """

    def __init__(
        self,
        enrichment: EnrichmentProvider,
        forwarder: AnalysisForwarder,
        result_buffer: ResultBuffer,
    ):
        self.enrichment = enrichment
        self.forwarder = forwarder
        self.result_buffer = result_buffer

    async def process_webhook(self, payload: Any, event_kind: Optional[str] = None) -> PipelineResult:
        """
        Process a webhook payload through the full pipeline.

        Args:
            payload: Raw JSON body of the delivery
            event_kind: Value of the X-GitHub-Event header, if any

        Returns:
            PipelineResult with the buffered record or the error message
        """
        try:
            # Step 1: Decode and normalize
            event = WebhookEvent.from_payload(payload, event_kind=event_kind)
            logger.info(
                f"Received {event.event_kind} event for "
                f"{event.owner_login}/{event.repo_name}#{event.pr_number}"
            )
            request = normalize_event(event)

            # Step 2: Enrich
            enrichment = await self.enrichment.enrich(
                event.owner_login, event.repo_name, event.pr_number
            )
            request = apply_enrichment(request, enrichment)

            # Step 3: Forward
            verdict = await self.forwarder.forward(request)

            # Step 4: Buffer
            record = BufferedAnalysis(
                received_at=datetime.now(timezone.utc),
                request=request,
                verdict=verdict,
            )
            self.result_buffer.append(record)

            return PipelineResult(success=True, record=record)

        except Exception as e:
            logger.error(f"Webhook error: {e}")
            return PipelineResult(success=False, error=str(e) or type(e).__name__)
