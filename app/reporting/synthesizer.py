"""
Report Synthesizer

Combines a gatekeeper verdict with heuristic findings into a structured
report (threat level, issue lists, recommendations).
"""

import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.models.analysis import SUGGESTION_CODE_PATTERN, BufferedAnalysis, Decision, Verdict
from app.models.report import AnalysisReport, Report, ThreatLevel
from app.reporting.heuristics import scan_diff

CRITICAL_THRESHOLD = 0.75
ELEVATED_THRESHOLD = 0.35

# Substring of the suggestion code -> security issue description
SECURITY_MARKERS: Tuple[Tuple[str, str], ...] = (
    ("CREDENTIAL", "Sensitive credentials exposed in code"),
    ("DANGEROUS_EXEC", "Dangerous code execution patterns detected"),
    ("BUILD_CONFIG", "Critical build/deployment configuration changes"),
)

RECOMMENDATIONS: Dict[Decision, Tuple[str, str, str]] = {
    Decision.BLOCK: (
        "🛑 BLOCK: Do not merge - requires immediate action",
        "• Escalate to security team if CREDENTIAL_EXPOSURE detected",
        "• Address all security issues before proceeding",
    ),
    Decision.WARN: (
        "⚠️ WARN: Additional review required before merge",
        "• Complete all suggested tests",
        "• Have lead developer review the changes",
    ),
    Decision.ALLOW: (
        "✅ ALLOW: Approved for merge",
        "• Proceed with merge when ready",
        "• Consider additional testing for robustness",
    ),
}

SUGGESTION_DESCRIPTIONS: Dict[str, str] = {
    "BLOCK_CRITICAL_SECURITY": "Immediate escalation required - critical security threat detected",
    "BLOCK_CREDENTIAL_EXPOSURE": "Credentials exposed - immediate security action required",
    "BLOCK_DANGEROUS_EXEC": "Dangerous code execution detected - manual review mandatory",
    "BLOCK_HIGH_SECURITY_RISK": "High risk - requires manual review and escalation",
    "BLOCK_DANGEROUS_OPERATIONS": "Dangerous operations detected - security review needed",
    "WARN_MODERATE_RISK_REVIEW": "Moderate risk - additional code review and testing required",
    "WARN_BUILD_CONFIG_CHANGES": "Build configuration changes - deployment review needed",
    "WARN_CONFIG_CHANGES_REVIEW": "Configuration changes detected - audit and deployment review needed",
    "WARN_ENHANCED_TESTING_NEEDED": "Enhanced testing requirements - additional test coverage recommended",
    "WARN_SPELLING_ERRORS": "Spelling mistakes detected in code or comments; please fix typos and documentation.",
    "ALLOW_WITH_TESTING_REQUIRED": "Approved - testing recommended before merge",
    "ALLOW_LOW_RISK_SAFE": "Low risk - safe to merge",
}
DEFAULT_SUGGESTION_DESCRIPTION = "Review suggested code"

_SUGGESTION_CODE_RE = re.compile(SUGGESTION_CODE_PATTERN)


def threat_level(risk_score: Optional[float]) -> ThreatLevel:
    """Step function over the risk score; band lower bounds are inclusive."""
    if risk_score is None:
        return ThreatLevel.LOW
    if risk_score >= CRITICAL_THRESHOLD:
        return ThreatLevel.CRITICAL
    if risk_score >= ELEVATED_THRESHOLD:
        return ThreatLevel.ELEVATED
    return ThreatLevel.LOW


def suggestion_category(code: Optional[str]) -> Optional[Decision]:
    """BLOCK/WARN/ALLOW family of a suggestion code, None if unrecognised."""
    if not code:
        return None
    match = _SUGGESTION_CODE_RE.match(code)
    return Decision(match.group(1)) if match else None


def describe_suggestion_code(code: Optional[str]) -> str:
    return SUGGESTION_DESCRIPTIONS.get(code or "", DEFAULT_SUGGESTION_DESCRIPTION)


def synthesize_report(verdict: Verdict, findings: Optional[Sequence[str]] = None) -> Report:
    """
    Build the report for one verdict.

    Exactly one recommendation block is emitted; any decision other than
    BLOCK or WARN gets the approval block.
    """
    code = verdict.suggestion_code
    security_issues = [
        description for marker, description in SECURITY_MARKERS if code and marker in code
    ]
    recommendations = RECOMMENDATIONS.get(verdict.decision, RECOMMENDATIONS[Decision.ALLOW])

    return Report(
        threat_level=threat_level(verdict.risk_score),
        security_issues=security_issues,
        code_quality_issues=list(findings or []),
        test_coverage_gaps=list(verdict.missing_tests),
        recommendations=list(recommendations),
        pattern=code or "UNKNOWN",
        suggestion_description=describe_suggestion_code(code) if code else None,
        suggestion_category=suggestion_category(code),
    )


def dedupe_analyses(analyses: Iterable[BufferedAnalysis]) -> List[BufferedAnalysis]:
    """Keep the first analysis seen per repository/PR pair, preserving order."""
    seen = set()
    unique = []
    for analysis in analyses:
        key = analysis.request.dedup_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(analysis)
    return unique


def build_analysis_reports(analyses: Iterable[BufferedAnalysis]) -> List[AnalysisReport]:
    """Deduplicate analyses and attach heuristic findings and reports."""
    reports = []
    for analysis in dedupe_analyses(analyses):
        code_issues = scan_diff(
            analysis.request.diff, analysis.verdict.spelling_suggestions
        )
        reports.append(
            AnalysisReport(
                received_at=analysis.received_at,
                request=analysis.request,
                verdict=analysis.verdict,
                code_issues=code_issues,
                report=synthesize_report(analysis.verdict, code_issues),
            )
        )
    return reports
