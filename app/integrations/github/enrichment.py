"""
GitHub Pull Request Enrichment

Responsibilities:
- Fetch authoritative PR metadata (changed files) through the GitHub API
- Fetch the full PR diff text
- Degrade to "no enrichment" on any failure; nothing here raises to callers
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from github import Auth, Github
from github.GithubException import GithubException

from app.config import Settings
from app.services.normalizer import coerce_changed_files

logger = logging.getLogger(__name__)

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
UNKNOWN = "unknown"


@dataclass
class EnrichmentResult:
    """Enrichment outcome; None fields mean "keep the webhook default"."""

    diff: Optional[str] = None
    changed_files: Optional[List[str]] = None

    @property
    def is_empty(self) -> bool:
        return self.diff is None and self.changed_files is None


class EnrichmentProvider(ABC):
    """Source of supplementary PR data."""

    @abstractmethod
    async def enrich(self, owner: str, repo: str, pr_number: str) -> EnrichmentResult:
        raise NotImplementedError


class NoopEnrichmentProvider(EnrichmentProvider):
    """Used when no GitHub credential is configured."""

    async def enrich(self, owner: str, repo: str, pr_number: str) -> EnrichmentResult:
        return EnrichmentResult()


class GitHubEnrichmentProvider(EnrichmentProvider):
    """Fetches PR metadata and diff text from the GitHub REST API."""

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        user_agent: str = "ai-gatekeeper-webhook",
        timeout: float = 10.0,
        retries: int = 1,
        client: Optional[Github] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.retries = max(0, retries)
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": DIFF_MEDIA_TYPE,
            "User-Agent": user_agent,
        }
        self.client = client or Github(
            auth=Auth.Token(token),
            base_url=self.api_url,
            timeout=int(timeout),
            user_agent=user_agent,
            retry=self.retries,
        )
        self.session = session or requests.Session()

    async def enrich(self, owner: str, repo: str, pr_number: str) -> EnrichmentResult:
        """
        Fetch diff and metadata concurrently.

        Skipped entirely unless owner, repository and PR number are all
        resolved. The two calls succeed or fail independently.
        """
        if UNKNOWN in (owner, repo, pr_number):
            logger.info(
                f"Skipping GitHub enrichment, unresolved PR identity {owner}/{repo}#{pr_number}"
            )
            return EnrichmentResult()

        logger.info(f"Fetching PR details from GitHub: {owner}/{repo}#{pr_number}")
        diff, details = await asyncio.gather(
            asyncio.to_thread(self.fetch_pr_diff, owner, repo, pr_number),
            asyncio.to_thread(self.fetch_pr_details, owner, repo, pr_number),
        )

        changed_files = None
        if details is not None:
            changed_files = coerce_changed_files(*_file_info(details))

        if diff is not None:
            logger.info(f"Fetched PR diff ({len(diff)} bytes)")
        if changed_files is not None:
            logger.info(f"Fetched PR details: {changed_files}")

        return EnrichmentResult(diff=diff, changed_files=changed_files)

    def fetch_pr_details(self, owner: str, repo: str, pr_number: str) -> Optional[Dict[str, Any]]:
        """Return the raw pull request JSON, or None on any failure."""
        try:
            pull = self.client.get_repo(f"{owner}/{repo}", lazy=True).get_pull(int(pr_number))
            return pull.raw_data
        except GithubException as e:
            logger.error(f"GitHub API error fetching PR #{pr_number}: {e.status} {e.data}")
        except requests.RequestException as e:
            logger.error(f"Error fetching PR details from GitHub: {e}")
        except ValueError as e:
            logger.error(f"Invalid PR number {pr_number!r}: {e}")
        return None

    def fetch_pr_diff(self, owner: str, repo: str, pr_number: str) -> Optional[str]:
        """
        Return the unified diff for a pull request, or None on any failure.

        Transport errors are retried; HTTP error statuses are not.
        """
        url = f"{self.api_url}/repos/{owner}/{repo}/pulls/{pr_number}"
        attempts = 1 + self.retries

        for attempt in range(1, attempts + 1):
            try:
                resp = self.session.get(url, headers=self._headers, timeout=self.timeout)
            except (requests.ConnectionError, requests.Timeout) as e:
                logger.warning(
                    f"Error fetching PR diff from GitHub (attempt {attempt}/{attempts}): {e}"
                )
                continue
            except requests.RequestException as e:
                logger.error(f"Error fetching PR diff from GitHub: {e}")
                return None

            if not resp.ok:
                logger.error(f"GitHub API diff error: {resp.status_code} {resp.reason}")
                return None
            # An empty diff keeps the webhook body
            return resp.text or None

        return None


def _file_info(details: Dict[str, Any]):
    """Split PR metadata into (file list, file count) for coerce_changed_files."""
    value = details.get("changed_files")
    if isinstance(value, list):
        return value, None
    if isinstance(value, int) and not isinstance(value, bool):
        return None, value
    return None, None


def build_enrichment_provider(settings: Settings) -> EnrichmentProvider:
    """Pick the GitHub provider when a token is configured."""
    if not settings.github_token:
        logger.warning("GITHUB_TOKEN not set, skipping GitHub API calls")
        return NoopEnrichmentProvider()
    return GitHubEnrichmentProvider(
        token=settings.github_token,
        api_url=settings.github_api_url,
        user_agent=settings.github_user_agent,
        timeout=settings.enrichment_timeout,
        retries=settings.enrichment_retries,
    )
