"""
Webhook API Routes

Receives GitHub pull request webhooks and serves recent analyses to the
dashboard poller.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from app.api.dependencies import get_pipeline, get_result_buffer
from app.models.api_responses import (
    ReportsResponse,
    ResultsResponse,
    WebhookErrorResponse,
    WebhookResponse,
)
from app.reporting import build_analysis_reports
from app.services.pipeline import WebhookPipeline
from app.services.result_buffer import ResultBuffer

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/webhook",
    response_model=WebhookResponse,
    responses={500: {"model": WebhookErrorResponse}},
)
async def receive_webhook(
    request: Request,
    x_github_event: Optional[str] = Header(None),
    pipeline: WebhookPipeline = Depends(get_pipeline),
):
    """
    Analyze a pull request webhook delivery.

    Normalizes the payload, enriches it from GitHub when a token is
    configured, forwards it to the gatekeeper and buffers the verdict.
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("Webhook body is not valid JSON, continuing with an empty payload")
        payload = {}

    result = await pipeline.process_webhook(payload, event_kind=x_github_event)

    if not result.success:
        error = WebhookErrorResponse(error=result.error or "Webhook processing failed")
        return JSONResponse(status_code=500, content=error.model_dump())

    verdict = result.record.verdict.model_dump(mode="json", by_alias=True)
    return WebhookResponse(gatekeeper=verdict)


@router.get("/results", response_model=ResultsResponse)
async def list_results(result_buffer: ResultBuffer = Depends(get_result_buffer)):
    """Recent analyses, most recent first."""
    return ResultsResponse(items=result_buffer.snapshot())


@router.get("/results/reports", response_model=ReportsResponse)
async def list_reports(result_buffer: ResultBuffer = Depends(get_result_buffer)):
    """
    Recent analyses with derived review reports.

    One entry per repository/PR pair, keeping the most recent analysis.
    """
    return ReportsResponse(items=build_analysis_reports(result_buffer.snapshot()))
