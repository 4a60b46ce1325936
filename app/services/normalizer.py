"""
Request Normalizer

Maps a decoded webhook event onto the canonical AnalysisRequest. Missing data
falls back to defaults; normalization never fails.
"""

import json
import logging
from typing import Any, List, Optional

from app.models.analysis import AnalysisRequest
from app.models.webhook import WebhookEvent

logger = logging.getLogger(__name__)


def _file_entry_to_text(entry: Any) -> str:
    if isinstance(entry, str):
        return entry
    return json.dumps(entry, separators=(",", ":"), default=str)


def coerce_changed_files(
    files: Optional[List[Any]], count: Optional[int] = None
) -> Optional[List[str]]:
    """
    Turn provider file information into a list of strings.

    A file list wins over a count. A count becomes a single
    ``"<n> files changed"`` entry. Returns None when neither is present.
    """
    if files is not None:
        return [_file_entry_to_text(entry) for entry in files]
    if count is not None:
        return [f"{count} files changed"]
    return None


def normalize_event(event: WebhookEvent) -> AnalysisRequest:
    """Build the un-enriched AnalysisRequest for a webhook event."""
    pr = event.pull_request
    changed_files = coerce_changed_files(pr.files, pr.changed_files) or []

    request = AnalysisRequest(
        pr_number=event.pr_number,
        author=event.author,
        repository=f"{event.owner_login}/{event.repo_name}",
        changed_files=changed_files,
        diff=pr.body or "",
    )
    logger.debug(
        f"Normalized {event.event_kind} event for {request.repository}#{request.pr_number} "
        f"({len(request.changed_files)} file entries)"
    )
    return request
