"""Configuration for report rendering and command execution.

Reporters receive a RenderOptions instance explicitly. The CLI builds a
CommandConfig from its flags and the environment and validates it before any
input is read.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_ID_LENGTH = 8
DEFAULT_TIMEOUT_SECONDS = 30.0


class ConfigError(Exception):
    """Raised when a command is configured inconsistently."""


@dataclass(frozen=True)
class RenderOptions:
    """Rendering options shared by all report generators."""

    id_length: int = DEFAULT_ID_LENGTH
    # Stripped from trace set names when they are used as column headers.
    set_name_suffix: str = ".json"

    def __post_init__(self) -> None:
        if self.id_length < 1:
            raise ConfigError(f"id_length must be positive, got {self.id_length}")


@dataclass
class CommandConfig:
    """Settings for a single CLI invocation."""

    inputs: list[str] = field(default_factory=list)
    attribute: str = "trace_id"
    pairwise: bool = False
    pr_number: int = 0
    owner: str = ""
    repo: str = ""
    dry_run: bool = False
    token: str | None = None
    api_url: str = DEFAULT_GITHUB_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    render: RenderOptions = field(default_factory=RenderOptions)

    @classmethod
    def from_env(cls, **kwargs) -> "CommandConfig":
        """Creates a config, filling credentials from the environment.

        GITHUB_TOKEN supplies the API token and GITHUB_API_URL overrides the
        API base URL (for GitHub Enterprise installations).
        """
        kwargs.setdefault("token", os.getenv("GITHUB_TOKEN") or None)
        kwargs.setdefault(
            "api_url", os.getenv("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL
        )
        return cls(**kwargs)

    def validate(self, min_inputs: int = 1) -> None:
        """Checks flag combinations.

        Raises:
            ConfigError: If the configuration cannot be executed.
        """
        if len(self.inputs) < min_inputs:
            if min_inputs == 1:
                raise ConfigError("an input file is required")
            raise ConfigError(
                f"at least {min_inputs} input files are required for comparison"
            )
        if self.pairwise and len(self.inputs) != 2:
            raise ConfigError("pairwise comparison requires exactly two input files")

        if self.dry_run:
            return

        if not self.owner or not self.repo:
            raise ConfigError("--owner and --repo are required when not using --dry-run")
        if self.pr_number <= 0:
            raise ConfigError("--pr is required when not using --dry-run")
        if not self.token:
            raise ConfigError(
                "GITHUB_TOKEN environment variable is required when not using --dry-run"
            )
        logger.debug(
            f"Posting to {self.owner}/{self.repo}#{self.pr_number} via {self.api_url}"
        )
