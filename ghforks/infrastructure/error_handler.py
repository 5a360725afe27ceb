"""
Error taxonomy for ghforks and translation of HTTP client failures.

Every error carries the process exit code of its category so the CLI can
report it without a lookup table.
"""

import functools
from typing import Any, Callable, Optional

import httpx


class ForkListError(Exception):
    """Base exception for every failure the tool reports."""

    exit_code = 1

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message)

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message} (Original: {self.original_error})"
        return self.message


class UsageError(ForkListError):
    """Raised for unknown options or malformed option values."""

    exit_code = 1


class RepositoryResolutionError(ForkListError):
    """Raised when the GitHub owner/repository cannot be derived locally."""

    exit_code = 2


class MissingToolError(ForkListError):
    """Raised when a required local facility (git, temp files) is unavailable."""

    exit_code = 3


class UpstreamRequestError(ForkListError):
    """Raised for non-success responses and transport failures."""

    exit_code = 4

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, original_error)
        self.status_code = status_code


class RequestTimeoutError(UpstreamRequestError):
    """Raised when a request does not complete within the configured timeout."""

    exit_code = 5


class MalformedRecordError(ForkListError):
    """Raised when a response does not have the expected shape."""

    exit_code = 6


def upstream_message(response: httpx.Response) -> str:
    """Extract GitHub's error message from a response, falling back to the body."""

    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return response.text.strip() or response.reason_phrase


def _request_url(error: httpx.RequestError) -> str:
    try:
        return str(error.request.url)
    except RuntimeError:
        return "GitHub API"


def handle_api_error(func: Callable) -> Callable:
    """
    Decorator translating httpx failures of an async call into
    UpstreamRequestError or RequestTimeoutError.

    Errors that already belong to the taxonomy pass through untouched.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except ForkListError:
            raise

        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"Request to {_request_url(e)} timed out", e
            ) from e

        except httpx.HTTPStatusError as e:
            response = e.response
            raise UpstreamRequestError(
                f"GitHub API returned {response.status_code} for "
                f"{e.request.url}: {upstream_message(response)}",
                status_code=response.status_code,
            ) from e

        except httpx.RequestError as e:
            raise UpstreamRequestError(
                f"Request to {_request_url(e)} failed", e
            ) from e

    return wrapper


__all__ = [
    "ForkListError",
    "UsageError",
    "RepositoryResolutionError",
    "MissingToolError",
    "UpstreamRequestError",
    "RequestTimeoutError",
    "MalformedRecordError",
    "handle_api_error",
    "upstream_message",
]
