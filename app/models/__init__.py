# Shared data models
from app.models.webhook import WebhookEvent, GitHubPullRequest, GitHubRepository, GitHubUser
from app.models.analysis import (
    AnalysisRequest,
    BufferedAnalysis,
    Decision,
    Verdict,
    SUGGESTION_CODE_PATTERN,
)
from app.models.report import AnalysisReport, Report, ThreatLevel

__all__ = [
    "WebhookEvent",
    "GitHubPullRequest",
    "GitHubRepository",
    "GitHubUser",
    "AnalysisRequest",
    "BufferedAnalysis",
    "Decision",
    "Verdict",
    "SUGGESTION_CODE_PATTERN",
    "AnalysisReport",
    "Report",
    "ThreatLevel",
]
