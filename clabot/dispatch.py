"""Decides whether an event warrants a CLA check and runs it.

A pull request event goes straight to the check. An issue comment only does
when it is on a pull request, was not written by an ignored account (the bot's
own comments would otherwise re-trigger it) and mentions a trigger phrase; the
pull request is then fetched and checked as if it had just been opened.
"""

from typing import Iterable, Optional, Set

import structlog

from clabot.config import BotConfig
from clabot.models import (
    Event,
    EventKind,
    IssueComment,
    PullRequestOpened,
    Verdict,
    VerdictKind,
)
from clabot.reporter import report_verdict
from clabot.services.github import GitHubClient
from clabot.services.sheets import SheetClient
from clabot.signers import load_signers

logger = structlog.get_logger(__name__)


def comment_triggers_check(body: str, phrases: Iterable[str]) -> bool:
    text = (body or "").lower()
    return any(p in text for p in phrases)


def evaluate(event: PullRequestOpened, signers: Set[str]) -> Verdict:
    kind = VerdictKind.COMPLIANT if event.author in signers else VerdictKind.NON_COMPLIANT
    return Verdict(kind=kind, sha=event.head_sha, pr_number=event.number, author=event.author)


async def handle_pull_request(
    config: BotConfig, event: PullRequestOpened, gh: GitHubClient, sheets: SheetClient
) -> Verdict:
    # Signer file comes from the base branch, never the PR head
    signers = await load_signers(config, gh, sheets, event.base_ref)
    verdict = evaluate(event, signers)
    logger.info(
        "CLA verdict",
        author=event.author,
        pr_number=event.number,
        verdict=verdict.kind.value,
    )
    await report_verdict(gh, config, verdict)
    return verdict


async def handle_issue_comment(
    config: BotConfig, event: IssueComment, gh: GitHubClient, sheets: SheetClient
) -> Optional[Verdict]:
    if event.author in config.ignore_authors:
        logger.info("Ignoring comment from ignored author", author=event.author)
        return None
    if not event.is_pull_request:
        logger.info("Ignoring comment on an issue", issue_number=event.issue_number)
        return None
    if not comment_triggers_check(event.body, config.trigger_phrases):
        logger.info("Comment does not request a CLA check", issue_number=event.issue_number)
        return None

    pr = await gh.get_pull_request(config.repository, event.issue_number)
    return await handle_pull_request(config, PullRequestOpened.from_pull_request(pr), gh, sheets)


async def handle_event(
    config: BotConfig, event: Event, gh: GitHubClient, sheets: SheetClient
) -> Optional[Verdict]:
    """Return the verdict that was reported, or None when the event is a no-op."""
    if event.kind is EventKind.PULL_REQUEST:
        logger.info("Handling pull request", pr_number=event.number)
        return await handle_pull_request(config, event, gh, sheets)
    if event.kind is EventKind.ISSUE_COMMENT:
        logger.info("Handling issue comment", issue_number=event.issue_number)
        return await handle_issue_comment(config, event, gh, sheets)
    raise ValueError(f"unhandled event kind: {event.kind!r}")
