from typing import Optional, Type, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from clabot.errors import DecodeError
from clabot.models import (
    Event,
    EventKind,
    IssueComment,
    IssueCommentPayload,
    PullRequestOpened,
    PullRequestPayload,
    normalize_login,
)

logger = structlog.get_logger(__name__)

P = TypeVar("P", bound=BaseModel)

SUPPORTED_EVENTS = {kind.value for kind in EventKind}


def _validate(model: Type[P], raw: bytes, kind: str) -> P:
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        raise DecodeError(f"{kind} payload is not valid: {e}") from e


def decode_event(kind: str, raw: bytes) -> Optional[Event]:
    """Decode a webhook payload; returns None for event kinds the bot ignores."""
    if kind == EventKind.PULL_REQUEST.value:
        pr_payload = _validate(PullRequestPayload, raw, kind)
        return PullRequestOpened.from_pull_request(pr_payload.pull_request)

    if kind == EventKind.ISSUE_COMMENT.value:
        payload = _validate(IssueCommentPayload, raw, kind)
        return IssueComment(
            author=normalize_login(payload.comment.user.login),
            body=payload.comment.body or "",
            issue_number=payload.issue.number,
            is_pull_request=payload.issue.is_pull_request,
        )

    return None


def load_event(kind: str, path: str) -> Optional[Event]:
    """Read the payload the runner wrote to `path` and decode it."""
    if kind not in SUPPORTED_EVENTS:
        return None

    logger.info("Parsing event", event_name=kind, path=path)
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise DecodeError(f"cannot read {kind} payload from {path!r}: {e}") from e
    return decode_event(kind, raw)
