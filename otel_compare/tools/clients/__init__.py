"""API clients for publishing reports."""

from .github import GitHubClient, GitHubError

__all__ = ["GitHubClient", "GitHubError"]
