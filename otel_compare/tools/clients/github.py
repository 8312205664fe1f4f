"""GitHub client for posting reports as pull request comments."""

import logging

import httpx

from ...config import DEFAULT_GITHUB_API_URL, DEFAULT_TIMEOUT_SECONDS
from ..common import get_tracer

logger = logging.getLogger(__name__)

tracer = get_tracer(__name__)


class GitHubError(Exception):
    """Raised when a comment cannot be posted."""


class GitHubClient:
    """Minimal GitHub REST client authenticated with a token."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def comment_pr(self, owner: str, repo: str, pr_number: int, body: str) -> int:
        """Adds a comment to a pull request.

        Args:
            owner: Repository owner.
            repo: Repository name.
            pr_number: Pull request number.
            body: Markdown comment body.

        Returns:
            The id of the created comment.

        Raises:
            GitHubError: If the request fails or GitHub rejects it.
        """
        path = f"/repos/{owner}/{repo}/issues/{pr_number}/comments"

        with tracer.start_as_current_span("comment_pr") as span:
            span.set_attribute("github.repository", f"{owner}/{repo}")
            span.set_attribute("github.pr_number", pr_number)

            try:
                response = self._client.post(path, json={"body": body})
            except httpx.HTTPError as e:
                span.record_exception(e)
                raise GitHubError(f"error commenting on PR: {e}") from e

            if response.status_code >= 300:
                logger.error(
                    f"Failed to comment on {owner}/{repo}#{pr_number}: {response.text}"
                )
                raise GitHubError(
                    f"error commenting on PR: API error {response.status_code}"
                )

            comment_id = response.json().get("id", 0)
            logger.info(f"Posted comment {comment_id} on {owner}/{repo}#{pr_number}")
            return comment_id
