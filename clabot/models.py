from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel


def normalize_login(login: Optional[str]) -> str:
    """Logins compare case-insensitively and ignore surrounding whitespace."""
    return (login or "").strip().lower()


# --- Webhook payloads (only the keys the bot reads) ---


class GitHubUser(BaseModel):
    login: str


class GitRef(BaseModel):
    ref: str
    sha: str


class PullRequest(BaseModel):
    number: int
    user: GitHubUser
    head: GitRef
    base: GitRef


class PullRequestPayload(BaseModel):
    action: Optional[str] = None
    pull_request: PullRequest


class Issue(BaseModel):
    number: int
    # Present (as a dict of API links) only when the issue is a pull request
    pull_request: Optional[Dict[str, Any]] = None

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None


class Comment(BaseModel):
    user: GitHubUser
    body: Optional[str] = None


class IssueCommentPayload(BaseModel):
    action: Optional[str] = None
    issue: Issue
    comment: Comment


# --- Decoded events ---


class EventKind(str, Enum):
    PULL_REQUEST = "pull_request"
    ISSUE_COMMENT = "issue_comment"


@dataclass(frozen=True)
class PullRequestOpened:
    author: str
    head_sha: str
    base_ref: str
    number: int
    kind: EventKind = field(default=EventKind.PULL_REQUEST, init=False)

    @classmethod
    def from_pull_request(cls, pr: PullRequest) -> "PullRequestOpened":
        return cls(
            author=normalize_login(pr.user.login),
            head_sha=pr.head.sha,
            base_ref=pr.base.ref,
            number=pr.number,
        )


@dataclass(frozen=True)
class IssueComment:
    author: str
    body: str
    issue_number: int
    is_pull_request: bool
    kind: EventKind = field(default=EventKind.ISSUE_COMMENT, init=False)


Event = Union[PullRequestOpened, IssueComment]


# --- Verdicts ---


class VerdictKind(str, Enum):
    COMPLIANT = "compliant"
    NON_COMPLIANT = "non_compliant"


# Commit status state and description posted for each verdict
STATUS_BY_VERDICT = {
    VerdictKind.COMPLIANT: ("success", "CLA signed ✔️"),
    VerdictKind.NON_COMPLIANT: ("failure", "CLA not signed ❌"),
}


@dataclass(frozen=True)
class Verdict:
    kind: VerdictKind
    sha: str
    pr_number: int
    author: str

    @property
    def compliant(self) -> bool:
        return self.kind is VerdictKind.COMPLIANT

    @property
    def state(self) -> str:
        return STATUS_BY_VERDICT[self.kind][0]

    @property
    def description(self) -> str:
        return STATUS_BY_VERDICT[self.kind][1]
