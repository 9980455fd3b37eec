"""HTTP adapter for the issue label and comment endpoints of the GitHub REST API v3."""

from typing import Any
from urllib.parse import quote

import httpx
import pydantic
import structlog

from issue_state.adapters.github_models import GitHubComment, GitHubLabel

logger = structlog.get_logger(__name__)

_LABEL_LIST = pydantic.TypeAdapter(list[GitHubLabel])


class GitHubClientError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubClient:
    _BASE_URL = "https://api.github.com"

    def __init__(self, token: str, base_url: str | None = None, timeout: float | None = None) -> None:
        headers: dict[str, str] = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        self._http = httpx.AsyncClient(
            base_url=(base_url or self._BASE_URL).rstrip("/"),
            headers=headers,
            timeout=timeout,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._http.is_closed:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Issue labels
    # ------------------------------------------------------------------

    async def list_issue_labels(self, repo: str, number: str | int) -> list[GitHubLabel]:
        """Fetch the labels currently applied to an issue.

        Only the first page is read; issues carry far fewer labels than a page holds.

        Args:
            repo: Repository in ``owner/repo`` format.
            number: Issue number.

        Raises:
            GitHubClientError: On any non-2xx response or transport failure.
        """
        resp = await self._send("GET", f"{self._issue_path(repo, number)}/labels")
        return self._parse_labels(resp)

    async def remove_issue_label(self, repo: str, number: str | int, name: str) -> None:
        """Remove one label from an issue. The label name is path-escaped."""
        await self._send("DELETE", f"{self._issue_path(repo, number)}/labels/{quote(name, safe='')}")

    async def add_issue_labels(self, repo: str, number: str | int, labels: list[str]) -> list[GitHubLabel]:
        """Add labels to an issue, returning the issue's full label set afterwards."""
        resp = await self._send("POST", f"{self._issue_path(repo, number)}/labels", payload={"labels": labels})
        return self._parse_labels(resp)

    # ------------------------------------------------------------------
    # Issue comments
    # ------------------------------------------------------------------

    async def create_issue_comment(self, repo: str, number: str | int, body: str) -> GitHubComment:
        """Post a comment on an issue.

        The comment exists once GitHub answers 2xx, so an unreadable reply body
        yields an empty GitHubComment instead of an error.
        """
        resp = await self._send("POST", f"{self._issue_path(repo, number)}/comments", payload={"body": body})
        try:
            return GitHubComment.model_validate_json(resp.content)
        except pydantic.ValidationError as exc:
            logger.warning("comment_response_unparsed", status_code=resp.status_code, error=str(exc))
            return GitHubComment()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _issue_path(repo: str, number: str | int) -> str:
        # the issue number is one path segment, never a sub-path
        return f"/repos/{repo}/issues/{quote(str(number), safe='')}"

    async def _send(self, method: str, url: str, payload: Any = None) -> httpx.Response:
        try:
            resp = await self._http.request(method, url, json=payload)
        except httpx.HTTPError as exc:
            raise GitHubClientError(f"GitHub request {method} {url} failed: {exc!r}") from exc
        self._raise_for_status(resp)
        return resp

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_error:
            raise GitHubClientError(
                f"GitHub API error {resp.status_code} {resp.reason_phrase}: {resp.text}",
                status_code=resp.status_code,
            )

    def _parse_labels(self, resp: httpx.Response) -> list[GitHubLabel]:
        """Validate the body as a JSON array of labels; bad JSON and wrong shapes both raise."""
        try:
            return _LABEL_LIST.validate_json(resp.content)
        except pydantic.ValidationError as exc:
            raise GitHubClientError(
                f"GitHub returned an unexpected label list (status {resp.status_code}): {exc}",
                status_code=resp.status_code,
            ) from exc
