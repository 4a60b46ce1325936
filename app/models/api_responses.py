"""
API Response Models

Pydantic models for consistent API response structures.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List

from app.models.analysis import BufferedAnalysis
from app.models.report import AnalysisReport


class WebhookResponse(BaseModel):
    """Response for a successfully forwarded webhook."""

    ok: bool = Field(True, description="Whether the pipeline completed")
    gatekeeper: Dict[str, Any] = Field(
        ..., description="Verdict returned by the gatekeeper engine"
    )


class WebhookErrorResponse(BaseModel):
    """Response for a webhook that failed anywhere in the pipeline."""

    ok: bool = Field(False, description="Always false for failures")
    error: str = Field(..., description="Underlying error message")


class ResultsResponse(BaseModel):
    """Recent analyses, most recent first."""

    items: List[BufferedAnalysis] = Field(default_factory=list)


class ReportsResponse(BaseModel):
    """Deduplicated analyses with derived reports, most recent first."""

    items: List[AnalysisReport] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Service health and configuration summary."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str = Field("ok", description="Service status")
    service: str = Field("webhook", description="Service name")
    github_token_configured: bool = Field(
        ..., description="Whether GitHub enrichment is enabled"
    )
    gatekeeper_url: str = Field(..., description="Forwarding endpoint")
