import base64
import binascii
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from clabot.errors import FetchError, FormatError
from clabot.models import PullRequest


class GitHubClient:
    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.base_url = base_url
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=30, transport=self.transport)

    async def get_file_contents(self, repo: str, path: str, ref: str) -> str:
        """
        Return the text of `path` at `ref` via the contents API.
        Raises FetchError if the file can't be retrieved (missing, auth, directory)
        and FormatError if it isn't UTF-8.
        """
        url = f"{self.base_url}/repos/{repo}/contents/{path.lstrip('/')}"
        try:
            async with self._client() as client:
                r = await client.get(url, headers=self._headers(), params={"ref": ref})
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise FetchError(f"could not fetch {path}@{ref} from {repo}: {e}") from e

        if not isinstance(data, dict) or data.get("type") != "file":
            raise FetchError(f"{path}@{ref} in {repo} is not a file")
        if data.get("encoding") != "base64":
            # Files over 1 MB come back without inline content
            raise FetchError(f"{path}@{ref} in {repo} has no inline content")

        try:
            return base64.b64decode(data.get("content") or "").decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise FormatError(f"{path}@{ref} in {repo} is not UTF-8 text: {e}") from e

    async def get_pull_request(self, repo: str, pr_number: int) -> PullRequest:
        url = f"{self.base_url}/repos/{repo}/pulls/{pr_number}"
        try:
            async with self._client() as client:
                r = await client.get(url, headers=self._headers())
                r.raise_for_status()
                return PullRequest.model_validate(r.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            raise FetchError(f"could not fetch pull request #{pr_number} from {repo}: {e}") from e

    async def create_status(
        self, repo: str, sha: str, state: str, description: str, context: str
    ) -> Dict:
        """
        POST /repos/{owner}/{repo}/statuses/{sha}
        `state` is one of "success", "failure", "pending", "error".
        """
        url = f"{self.base_url}/repos/{repo}/statuses/{sha}"
        payload = {"state": state, "description": description, "context": context}
        async with self._client() as client:
            r = await client.post(url, headers=self._headers(), json=payload)
            r.raise_for_status()
            return r.json()

    async def post_issue_comment(self, repo: str, issue_number: int, body: str) -> Dict:
        # PRs are issues under the hood; this posts a single top-level comment to the PR
        url = f"{self.base_url}/repos/{repo}/issues/{issue_number}/comments"
        async with self._client() as client:
            r = await client.post(url, headers=self._headers(), json={"body": body})
            r.raise_for_status()
            return r.json()
