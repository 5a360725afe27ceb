"""
GitHub REST API access: request construction and the HTTP transport.
"""

from typing import Dict, Optional

import httpx

from ..models import ApiConfig, RemoteTarget, SortOrder
from ..infrastructure.error_handler import handle_api_error
from ..infrastructure.logger import logger


GITHUB_MEDIA_TYPE = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"


####
##      REQUEST BUILDER
#####
class RequestBuilder:
    """
    Builds unsent requests for the two endpoints the tool reads.

    Building a request has no side effects; sending is the job of
    GitHubAPIService.
    """

    def __init__(self, config: ApiConfig):
        self.config = config

    def headers(self) -> Dict[str, str]:
        """Headers sent with every request."""

        # GitHub rejects requests without a User-Agent
        headers = {
            "Accept": GITHUB_MEDIA_TYPE,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": self.config.user_agent,
        }
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    def forks(
        self,
        target: RemoteTarget,
        sort_order: SortOrder,
        page: int
    ) -> httpx.Request:
        """Request for one page of `GET /repos/{owner}/{repo}/forks`."""

        if page < 1:
            raise ValueError("page numbers start at 1")

        return httpx.Request(
            "GET",
            f"{self.config.api_url}/repos/{target.owner}/{target.repository}/forks",
            params={
                "sort": sort_order.value,
                "per_page": self.config.per_page,
                "page": page,
            },
            headers=self.headers(),
        )

    def rate_limit(self) -> httpx.Request:
        """Request for `GET /rate_limit`, which does not count against the quota."""

        return httpx.Request(
            "GET",
            f"{self.config.api_url}/rate_limit",
            headers=self.headers(),
        )


####
##      API SERVICE
#####
class GitHubAPIService:
    """
    Sends requests built by RequestBuilder over a shared async client.

    Use as an async context manager so the connection pool is closed on
    every exit path.
    """

    def __init__(
        self,
        config: ApiConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self.requests_made = 0

    async def __aenter__(self) -> "GitHubAPIService":
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout),
            transport=self._transport,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @handle_api_error
    async def send(self, request: httpx.Request) -> httpx.Response:
        """
        Send a request and return the successful response.

        Raises:
            UpstreamRequestError: On a non-success status or transport failure
            RequestTimeoutError: When the configured timeout expires
        """
        if self._client is None:
            raise RuntimeError("GitHubAPIService must be used as an async context manager")

        logger.debug(f"{request.method} {request.url}")
        self.requests_made += 1

        response = await self._client.send(request)
        await response.aread()

        remaining = response.headers.get("x-ratelimit-remaining")
        if remaining is not None:
            logger.debug(f"{response.status_code} ({remaining} requests remaining)")

        response.raise_for_status()
        return response


__all__ = [
    "RequestBuilder",
    "GitHubAPIService",
]
