"""
Report Models

Human-facing reports derived from buffered analyses. Reports are computed on
read and never stored.
"""

from pydantic import Field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from app.models.analysis import AnalysisRequest, CamelModel, Decision, Verdict


class ThreatLevel(str, Enum):
    """Threat band derived from the verdict risk score."""

    LOW = "LOW"
    ELEVATED = "ELEVATED"
    CRITICAL = "CRITICAL"


class Report(CamelModel):
    """Structured review report for one pull request."""

    threat_level: ThreatLevel
    security_issues: List[str] = Field(default_factory=list)
    code_quality_issues: List[str] = Field(default_factory=list)
    test_coverage_gaps: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    pattern: str = "UNKNOWN"
    suggestion_description: Optional[str] = None
    suggestion_category: Optional[Decision] = None  # BLOCK/WARN/ALLOW family of pattern


class AnalysisReport(CamelModel):
    """Buffered analysis decorated with heuristic findings and its report."""

    received_at: datetime
    request: AnalysisRequest
    verdict: Verdict
    code_issues: List[str] = Field(default_factory=list)
    report: Report
