import structlog

from clabot.config import BotConfig
from clabot.models import Verdict
from clabot.services.github import GitHubClient

logger = structlog.get_logger(__name__)


def build_comment(author: str, message: str) -> str:
    return f"@{author} {message}"


async def report_verdict(gh: GitHubClient, config: BotConfig, verdict: Verdict) -> None:
    """Post the commit status, plus a comment when the CLA is not signed."""
    logger.info(
        "Posting status",
        sha=verdict.sha,
        state=verdict.state,
        description=verdict.description,
    )
    try:
        await gh.create_status(
            config.repository,
            verdict.sha,
            verdict.state,
            verdict.description,
            config.status_context,
        )
    except Exception as e:
        # Non-fatal: the status is a best-effort notification
        logger.warning("Posting status failed", sha=verdict.sha, error=str(e))

    if verdict.compliant:
        return

    try:
        await gh.post_issue_comment(
            config.repository,
            verdict.pr_number,
            build_comment(verdict.author, config.comment_msg),
        )
    except Exception as e:
        logger.warning("Posting comment failed", pr_number=verdict.pr_number, error=str(e))
