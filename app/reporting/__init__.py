"""
Reporting Module - Human-facing review reports.

Key responsibilities:
- Heuristic diff scanning for risky text patterns
- Report synthesis from gatekeeper verdicts
- Read-time deduplication of buffered analyses
"""

from app.reporting.heuristics import HeuristicRule, scan_diff, DEFAULT_RULES, SPELLING_LABEL
from app.reporting.synthesizer import (
    build_analysis_reports,
    dedupe_analyses,
    describe_suggestion_code,
    suggestion_category,
    synthesize_report,
    threat_level,
)

__all__ = [
    "HeuristicRule",
    "scan_diff",
    "DEFAULT_RULES",
    "SPELLING_LABEL",
    "build_analysis_reports",
    "dedupe_analyses",
    "describe_suggestion_code",
    "suggestion_category",
    "synthesize_report",
    "threat_level",
]
