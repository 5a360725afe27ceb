"""
GitHub domain models for ghforks.

This module contains strongly typed data classes representing the
GitHub entities the tool reads: the repository being inspected, the
forks returned by the API and the API quota.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ghforks.infrastructure.error_handler import (
    MalformedRecordError,
    RepositoryResolutionError,
)


@dataclass(frozen=True)
class RemoteTarget:
    """Immutable owner/repository pair derived from a git remote URL."""

    owner: str
    repository: str

    @property
    def display_name(self) -> str:
        return f'{self.owner}/{self.repository}'

    def __post_init__(self) -> None:
        if not self.owner or not self.repository:
            raise RepositoryResolutionError(
                "Repository owner and name are required"
            )


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class ForkRecord:
    """
    Read-only view of one fork object returned by the forks endpoint.

    Only the fields the formatter can project are kept. Each may be None
    when the upstream object lacks it; the formatter decides whether
    that is fatal.
    """

    git_url: Optional[str] = None
    html_url: Optional[str] = None
    svn_url: Optional[str] = None
    ssh_url: Optional[str] = None
    url: Optional[str] = None
    owner_login: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> ForkRecord:
        if not isinstance(data, dict):
            raise MalformedRecordError(
                f"Expected a fork object, got {type(data).__name__}"
            )

        owner = data.get('owner')
        login = owner.get('login') if isinstance(owner, dict) else None

        return cls(
            git_url=_optional_str(data.get('git_url')),
            html_url=_optional_str(data.get('html_url')),
            svn_url=_optional_str(data.get('svn_url')),
            ssh_url=_optional_str(data.get('ssh_url')),
            url=_optional_str(data.get('url')),
            owner_login=_optional_str(login),
        )


@dataclass(frozen=True)
class RateLimitStatus:
    """Core API quota as reported by `GET /rate_limit`."""

    remaining: int
    reset: int  # Epoch seconds
    limit: Optional[int] = None

    @property
    def reset_at(self) -> datetime:
        """Reset time as an aware datetime in the local timezone."""

        return datetime.fromtimestamp(self.reset).astimezone()

    @classmethod
    def from_json(cls, data: Any) -> RateLimitStatus:
        rate = data.get('rate') if isinstance(data, dict) else None
        if not isinstance(rate, dict):
            raise MalformedRecordError("Rate limit response has no 'rate' object")

        try:
            status = cls(
                remaining=int(rate['remaining']),
                reset=int(rate['reset']),
                limit=int(rate['limit']) if rate.get('limit') is not None else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedRecordError("Rate limit response is incomplete", e)

        try:
            datetime.fromtimestamp(status.reset)
        except (OverflowError, OSError, ValueError) as e:
            raise MalformedRecordError(
                f"Rate limit reset time out of range: {status.reset}", e
            )
        return status


__all__ = [
    "RemoteTarget",
    "ForkRecord",
    "RateLimitStatus",
]
