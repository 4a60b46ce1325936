"""
GitHub Webhook Payload Model

Decodes loosely-structured pull-request webhook payloads. Every field is
optional and values of the wrong type decode to None instead of failing, so
a malformed delivery still yields a usable event.
"""

from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _mapping_or_none(value: Any) -> Optional[dict]:
    return value if isinstance(value, dict) else None


def _text_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _count_or_none(value: Any) -> Optional[int]:
    # bool is an int subclass but never a file count
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


class GitHubUser(BaseModel):
    """Account reference (PR author or repository owner)."""

    model_config = ConfigDict(extra="ignore")

    login: Optional[str] = None

    @field_validator("login", mode="before")
    @classmethod
    def _coerce_login(cls, value: Any) -> Optional[str]:
        return _text_or_none(value)


class GitHubRepository(BaseModel):
    """Repository block of a webhook payload."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    owner: Optional[GitHubUser] = None

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> Optional[str]:
        return _text_or_none(value)

    @field_validator("owner", mode="before")
    @classmethod
    def _coerce_owner(cls, value: Any) -> Optional[dict]:
        return _mapping_or_none(value)


class GitHubPullRequest(BaseModel):
    """Pull request block of a webhook payload."""

    model_config = ConfigDict(extra="ignore")

    number: Optional[Union[int, str]] = None
    user: Optional[GitHubUser] = None
    files: Optional[List[Any]] = None
    changed_files: Optional[int] = None
    body: Optional[str] = None

    @field_validator("number", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Optional[Union[int, str]]:
        count = _count_or_none(value)
        if count is not None:
            return count
        return _text_or_none(value)

    @field_validator("user", mode="before")
    @classmethod
    def _coerce_user(cls, value: Any) -> Optional[dict]:
        return _mapping_or_none(value)

    @field_validator("files", mode="before")
    @classmethod
    def _coerce_files(cls, value: Any) -> Optional[list]:
        return value if isinstance(value, list) else None

    @field_validator("changed_files", mode="before")
    @classmethod
    def _coerce_changed_files(cls, value: Any) -> Optional[int]:
        return _count_or_none(value)

    @field_validator("body", mode="before")
    @classmethod
    def _coerce_body(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class WebhookEvent(BaseModel):
    """A single inbound webhook delivery."""

    event_kind: str = "unknown"
    pull_request: GitHubPullRequest = Field(default_factory=GitHubPullRequest)
    repository: GitHubRepository = Field(default_factory=GitHubRepository)

    @classmethod
    def from_payload(cls, payload: Any, event_kind: Optional[str] = None) -> "WebhookEvent":
        """
        Decode a raw webhook body.

        Payloads without a ``pull_request`` object are treated as the pull
        request itself, which is how test deliveries and replays post them.
        """
        body = _mapping_or_none(payload) or {}
        pr_data = _mapping_or_none(body.get("pull_request"))
        if pr_data is None:
            pr_data = body
        repo_data = _mapping_or_none(body.get("repository")) or {}

        return cls(
            event_kind=event_kind or "unknown",
            pull_request=GitHubPullRequest.model_validate(pr_data),
            repository=GitHubRepository.model_validate(repo_data),
        )

    @property
    def pr_number(self) -> str:
        number = self.pull_request.number
        return str(number) if number is not None else "unknown"

    @property
    def author(self) -> str:
        user = self.pull_request.user
        return user.login if user and user.login else "unknown"

    @property
    def owner_login(self) -> str:
        owner = self.repository.owner
        return owner.login if owner and owner.login else "unknown"

    @property
    def repo_name(self) -> str:
        return self.repository.name or "unknown"
