"""
Configuration models for ghforks.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

import httpx

from ghforks import NAME, __version__
from ghforks.infrastructure.error_handler import UsageError


DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0
MAX_PER_PAGE = 100


class OutputFormat(Enum):
    """URL styles a fork can be printed in."""

    GIT = "git"     # git://github.com/OWNER/REPO.git
    HTTP = "http"   # https://github.com/OWNER/REPO
    SVN = "svn"     # https://github.com/OWNER/REPO
    SSH = "ssh"     # git@github.com:OWNER/REPO.git
    API = "api"     # https://api.github.com/repos/OWNER/REPO

    @property
    def field_name(self) -> str:
        """Name of the fork object field holding this URL."""

        return _FORMAT_FIELDS[self]


_FORMAT_FIELDS = {
    OutputFormat.GIT: "git_url",
    OutputFormat.HTTP: "html_url",
    OutputFormat.SVN: "svn_url",
    OutputFormat.SSH: "ssh_url",
    OutputFormat.API: "url",
}


class SortOrder(Enum):
    """Values accepted by the `sort` parameter of the forks endpoint."""

    NEWEST = "newest"
    OLDEST = "oldest"
    WATCHERS = "watchers"


@dataclass(frozen=True)
class RunConfig:
    """
    Options for one invocation, resolved from the command line.

    Built once before any network activity and passed explicitly to
    every component that needs it.
    """

    output_format: OutputFormat = OutputFormat.GIT
    sort_order: SortOrder = SortOrder.NEWEST
    show_owner: bool = False
    verbose: bool = False
    remote: Optional[str] = None


def _git_config_token() -> Optional[str]:
    try:
        completed = subprocess.run(
            ["git", "config", "--get", "github.token"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return None
    return completed.stdout.strip() or None


@dataclass(frozen=True)
class ApiConfig:
    """Connection settings for the GitHub REST API."""

    api_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    per_page: int = MAX_PER_PAGE
    user_agent: str = f"{NAME}/{__version__} (python)"

    def __post_init__(self) -> None:
        try:
            url = httpx.URL(self.api_url)
        except httpx.InvalidURL as e:
            raise UsageError(f"Invalid GitHub API URL: {self.api_url!r}", e)
        if url.scheme not in ("http", "https") or not url.host:
            raise UsageError(f"Invalid GitHub API URL: {self.api_url!r}")
        if self.timeout <= 0:
            raise UsageError("timeout must be positive")
        if not 0 < self.per_page <= MAX_PER_PAGE:
            raise UsageError(f"per_page must be between 1 and {MAX_PER_PAGE}")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @classmethod
    def from_environment(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        use_git_config: bool = True
    ) -> ApiConfig:
        """
        Build the API settings from environment variables.

        The token is read from GITHUB_TOKEN, then GH_TOKEN, then the
        `github.token` git configuration key. No token means anonymous
        requests with the lower rate limit.
        """
        if environ is None:
            environ = os.environ

        token = environ.get("GITHUB_TOKEN") or environ.get("GH_TOKEN")
        if not token and use_git_config:
            token = _git_config_token()

        raw_timeout = environ.get("GHFORKS_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise UsageError(f"Invalid GHFORKS_TIMEOUT value: {raw_timeout!r}")

        return cls(
            api_url=(environ.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
            token=token or None,
            timeout=timeout,
        )


__all__ = [
    "OutputFormat",
    "SortOrder",
    "RunConfig",
    "ApiConfig",
]
