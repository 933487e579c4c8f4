import json
from typing import Dict, List, Optional

import httpx
import pytest
import structlog

from clabot.config import BotConfig
from clabot.models import PullRequest
from clabot.services.github import GitHubClient
from clabot.services.sheets import SheetClient
from clabot.settings import Settings


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def config() -> BotConfig:
    return BotConfig(
        repo_owner="owner",
        repo_name="repo",
        token="ghs_mock",
        event_name="pull_request",
        event_path="",
        signers_path="cla-signers.txt",
        google_sheet_url="https://sheets.example/signers.csv",
        comment_msg="Please sign the CLA.",
        ignore_authors=frozenset({"github-actions[bot]"}),
    )


def make_pull_request(login: str = "alice", number: int = 7, sha: str = "abc123", base: str = "main") -> Dict:
    return {
        "number": number,
        "title": "Add a feature",
        "user": {"login": login, "id": 1},
        "head": {"ref": "feature", "sha": sha},
        "base": {"ref": base, "sha": "fff000"},
    }


def make_comment_payload(login: str, body: str, number: int = 7, on_pr: bool = True) -> Dict:
    issue = {"number": number, "title": "Add a feature"}
    if on_pr:
        issue["pull_request"] = {"url": f"https://api.github.com/repos/owner/repo/pulls/{number}"}
    return {
        "action": "created",
        "issue": issue,
        "comment": {"id": 99, "user": {"login": login}, "body": body},
    }


@pytest.fixture
def pull_request():
    return make_pull_request


@pytest.fixture
def comment_payload():
    return make_comment_payload


class Outbound:
    """Records every GitHub API call and serves canned answers."""

    def __init__(self):
        self.files: List[tuple] = []
        self.pull_requests: List[tuple] = []
        self.statuses: List[Dict] = []
        self.comments: List[Dict] = []
        self.signer_file = ""
        self.pull: Optional[PullRequest] = None
        self.status_error: Optional[Exception] = None
        self.comment_error: Optional[Exception] = None

    @property
    def total(self) -> int:
        return len(self.files) + len(self.pull_requests) + len(self.statuses) + len(self.comments)


@pytest.fixture
def outbound(monkeypatch) -> Outbound:
    out = Outbound()

    async def fake_get_file_contents(self, repo, path, ref):
        out.files.append((repo, path, ref))
        return out.signer_file

    async def fake_get_pull_request(self, repo, pr_number):
        out.pull_requests.append((repo, pr_number))
        return out.pull

    async def fake_create_status(self, repo, sha, state, description, context):
        out.statuses.append(
            {"repo": repo, "sha": sha, "state": state, "description": description, "context": context}
        )
        if out.status_error:
            raise out.status_error
        return {"id": 1}

    async def fake_post_issue_comment(self, repo, issue_number, body):
        out.comments.append({"repo": repo, "issue_number": issue_number, "body": body})
        if out.comment_error:
            raise out.comment_error
        return {"id": 2}

    monkeypatch.setattr(GitHubClient, "get_file_contents", fake_get_file_contents, raising=True)
    monkeypatch.setattr(GitHubClient, "get_pull_request", fake_get_pull_request, raising=True)
    monkeypatch.setattr(GitHubClient, "create_status", fake_create_status, raising=True)
    monkeypatch.setattr(GitHubClient, "post_issue_comment", fake_post_issue_comment, raising=True)
    return out


@pytest.fixture
def sheet_client():
    """Build a SheetClient answering every request with `text` and `status`."""
    requests: List[httpx.Request] = []

    def _make(text: str = "", status: int = 200) -> SheetClient:
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status, text=text)

        return SheetClient(transport=httpx.MockTransport(handler))

    _make.requests = requests
    return _make


@pytest.fixture
def actions_env(monkeypatch, tmp_path):
    """Simulate the Actions runner environment inside tmp_path."""
    monkeypatch.chdir(tmp_path)
    for field in Settings.model_fields:
        monkeypatch.delenv(field.upper(), raising=False)
    monkeypatch.setenv("GITHUB_REPOSITORY", "owner/repo")
    monkeypatch.setenv("GITHUB_TOKEN", "ghs_mock")
    monkeypatch.setenv("SIGNERS_PATH", "cla-signers.txt")

    def write_event(name: str, payload: Dict):
        path = tmp_path / "event.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        monkeypatch.setenv("GITHUB_EVENT_NAME", name)
        monkeypatch.setenv("GITHUB_EVENT_PATH", str(path))
        return path

    return write_event
