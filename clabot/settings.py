from typing import Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from clabot.errors import ConfigurationError


class Settings(BaseSettings):
    # --- GitHub (populated by Actions) ---
    github_token: str = ""
    github_repository: Optional[str] = None  # e.g., "your-org/awesome-project"
    github_event_name: str = ""  # pull_request or issue_comment
    github_event_path: str = ""  # JSON payload written by the runner
    github_api_url: str = "https://api.github.com"

    # --- Signer sources ---
    signers_path: str = ""  # repo-relative, e.g. "cla-signers.txt"
    google_sheet_url: str = ""  # public CSV export of the signer sheet

    # --- Bot behavior ---
    comment_msg: str = ""
    bot_ignore_authors: str = ""  # comma-separated logins
    trigger_phrases: str = "@cla-bot,cla-bot check"
    status_context: str = "CLA check"
    debug: bool = False

    # --- CI summary & gate enforcement ---
    enable_job_summary: bool = True  # write a Markdown job summary to GitHub Actions
    enforce_on_ci: bool = False  # if True and the CLA is not signed, fail the job
    summary_title: str = "CLA Check"

    # --- Pydantic settings ---
    # Environment only; files in the checkout belong to the PR under test
    model_config = SettingsConfigDict(extra="ignore")


def load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
