"""Reconciles settings into the immutable configuration a run works from."""

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from clabot.errors import ConfigurationError
from clabot.models import normalize_login
from clabot.settings import Settings

DEFAULT_COMMENT_MSG = "Please sign the CLA and then comment `@cla-bot check` on this PR."
DEFAULT_IGNORE_AUTHORS = "github-actions[bot]"
DEFAULT_TRIGGER_PHRASES = ("@cla-bot", "cla-bot check")
DEFAULT_STATUS_CONTEXT = "CLA check"


@dataclass(frozen=True)
class BotConfig:
    """Configuration snapshot shared by every component of a run."""

    repo_owner: str
    repo_name: str
    token: str
    event_name: str
    event_path: str
    signers_path: str
    google_sheet_url: str
    comment_msg: str
    ignore_authors: FrozenSet[str]
    trigger_phrases: Tuple[str, ...] = DEFAULT_TRIGGER_PHRASES
    status_context: str = DEFAULT_STATUS_CONTEXT
    api_url: str = "https://api.github.com"
    debug: bool = False
    enable_job_summary: bool = True
    enforce_on_ci: bool = False
    summary_title: str = "CLA Check"

    @property
    def repository(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"


def split_repository(repository: str) -> Tuple[str, str]:
    """Split an "owner/name" repository slug."""
    parts = (repository or "").strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise ConfigurationError(
            f"GITHUB_REPOSITORY must look like 'owner/name', got {repository!r}"
        )
    return parts[0], parts[1]


def parse_login_list(raw: str) -> FrozenSet[str]:
    return frozenset(
        login for login in (normalize_login(a) for a in raw.split(",")) if login
    )


def parse_trigger_phrases(raw: str) -> Tuple[str, ...]:
    phrases = tuple(p.strip().lower() for p in raw.split(",") if p.strip())
    return phrases or DEFAULT_TRIGGER_PHRASES


def build_config(settings: Settings) -> BotConfig:
    owner, name = split_repository(settings.github_repository or "")
    if not settings.github_token:
        raise ConfigurationError("GITHUB_TOKEN is required")

    return BotConfig(
        repo_owner=owner,
        repo_name=name,
        token=settings.github_token,
        event_name=settings.github_event_name.strip(),
        event_path=settings.github_event_path,
        signers_path=settings.signers_path.strip(),
        google_sheet_url=settings.google_sheet_url.strip(),
        comment_msg=settings.comment_msg or DEFAULT_COMMENT_MSG,
        ignore_authors=parse_login_list(
            settings.bot_ignore_authors or DEFAULT_IGNORE_AUTHORS
        ),
        trigger_phrases=parse_trigger_phrases(settings.trigger_phrases),
        status_context=settings.status_context or DEFAULT_STATUS_CONTEXT,
        api_url=settings.github_api_url.rstrip("/"),
        debug=settings.debug,
        enable_job_summary=settings.enable_job_summary,
        enforce_on_ci=settings.enforce_on_ci,
        summary_title=settings.summary_title,
    )
