"""
Analysis Models

Canonical request sent to the gatekeeper engine, the verdict it returns, and
the buffered record kept for polling consumers. JSON field names are
camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union


SUGGESTION_CODE_PATTERN = r"^(BLOCK|WARN|ALLOW)_[A-Z_]+$"


class Decision(str, Enum):
    """Gatekeeper decision for a pull request."""

    ALLOW = "ALLOW"
    WARN = "WARN"
    BLOCK = "BLOCK"
    UNKNOWN = "UNKNOWN"


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisRequest(CamelModel):
    """Canonical analysis request; every field is always present."""

    pr_number: str = "unknown"
    author: str = "unknown"
    repository: str = "unknown/unknown"  # owner/name
    changed_files: List[str] = Field(default_factory=list)
    diff: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    @property
    def dedup_key(self) -> str:
        return f"{self.repository}-{self.pr_number}"


class Verdict(CamelModel):
    """
    Structured judgment returned by the gatekeeper engine.

    The engine is opaque beyond this field contract. Unknown fields are kept
    so they are echoed back to consumers unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    decision: Decision = Decision.UNKNOWN
    risk_score: Optional[float] = None
    risk_level: str = ""
    pr_status: Optional[str] = None
    summary: str = ""
    explanation: str = ""
    missing_tests: List[str] = Field(default_factory=list)
    suggested_tests: List[str] = Field(default_factory=list)
    suggestion_code: Optional[str] = None
    groq_suggestion: Optional[str] = None
    spelling_suggestions: List[str] = Field(default_factory=list)
    error_message: Optional[str] = None
    # Echoed as sent (the engine emits epoch milliseconds)
    analysis_timestamp: Optional[Union[int, float, str]] = None

    @field_validator("decision", mode="before")
    @classmethod
    def _coerce_decision(cls, value: Any) -> Decision:
        if isinstance(value, str) and value.upper() in Decision.__members__:
            return Decision(value.upper())
        return Decision.UNKNOWN

    @field_validator("risk_score", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> Optional[float]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return float(value)

    @field_validator("risk_level", "summary", "explanation", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator(
        "pr_status", "suggestion_code", "groq_suggestion", "error_message", mode="before"
    )
    @classmethod
    def _coerce_optional_text(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator("analysis_timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> Optional[Union[int, float, str]]:
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            return None
        return value

    @field_validator(
        "missing_tests", "suggested_tests", "spelling_suggestions", mode="before"
    )
    @classmethod
    def _coerce_list(cls, value: Any) -> List[str]:
        if not isinstance(value, list):
            return []
        return [item if isinstance(item, str) else str(item) for item in value]


class BufferedAnalysis(CamelModel):
    """One completed analysis held in the results window."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    received_at: datetime
    request: AnalysisRequest
    verdict: Verdict
