import json
import logging
from typing import Dict, List, Optional

import httpx
import pytest

from ghforks.infrastructure.logger import logger
from ghforks.models import ApiConfig, RemoteTarget
from ghforks.services import GitHubAPIService


# ---- Helpers ---------------------------------------------------------------

def make_fork(index: int, project: str = "project") -> Dict:
    """Fork object shaped like the ones GitHub returns."""

    owner = f"user{index}"
    return {
        "id": index,
        "name": project,
        "full_name": f"{owner}/{project}",
        "git_url": f"git://github.com/{owner}/{project}.git",
        "html_url": f"https://github.com/{owner}/{project}",
        "svn_url": f"https://svn.github.com/{owner}/{project}",
        "ssh_url": f"git@github.com:{owner}/{project}.git",
        "url": f"https://api.github.com/repos/{owner}/{project}",
        "owner": {"login": owner, "id": 1000 + index},
    }


def make_pages(page_count: int, per_page: int = 100) -> List[List[Dict]]:
    return [
        [make_fork(page * per_page + i) for i in range(per_page)]
        for page in range(page_count)
    ]


def page_body(items: List[Dict]) -> bytes:
    return json.dumps(items).encode()


class FakeGitHub:
    """
    In-memory stand-in for the GitHub REST API, served through
    httpx.MockTransport.
    """

    def __init__(
        self,
        pages: Optional[List[List[Dict]]] = None,
        fail_on_page: Optional[int] = None,
        fail_status: int = 500,
        rate: Optional[Dict] = None,
        link_headers: bool = False
    ):
        self.pages = pages or []
        self.fail_on_page = fail_on_page
        self.fail_status = fail_status
        self.rate = rate or {"limit": 60, "remaining": 42, "reset": 1700000000}
        self.link_headers = link_headers
        self.calls: List[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def fork_calls(self) -> List[httpx.Request]:
        return [c for c in self.calls if c.url.path.endswith("/forks")]

    @property
    def rate_limit_calls(self) -> List[httpx.Request]:
        return [c for c in self.calls if c.url.path == "/rate_limit"]

    def _links(self, request: httpx.Request, page: int) -> Dict[str, str]:
        base = str(request.url.copy_remove_param("page"))
        links = []
        if page < len(self.pages):
            links.append(f'<{base}&page={page + 1}>; rel="next"')
            links.append(f'<{base}&page={len(self.pages)}>; rel="last"')
        if page > 1:
            links.append(f'<{base}&page={page - 1}>; rel="prev"')
            links.append(f'<{base}&page=1>; rel="first"')
        return {"Link": ", ".join(links)} if links else {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)

        if request.url.path == "/rate_limit":
            return httpx.Response(200, json={"resources": {}, "rate": self.rate})

        if request.url.path.endswith("/forks"):
            page = int(request.url.params["page"])
            if page == self.fail_on_page:
                return httpx.Response(
                    self.fail_status, json={"message": "Server Error"}
                )

            items = self.pages[page - 1] if page <= len(self.pages) else []
            headers = {"Content-Type": "application/json"}
            if self.link_headers:
                headers.update(self._links(request, page))
            return httpx.Response(200, content=page_body(items), headers=headers)

        return httpx.Response(404, json={"message": "Not Found"})


# ---- Fixtures --------------------------------------------------------------

@pytest.fixture(autouse=True)
def reset_logger_level():
    yield
    logger.setLevel(logging.INFO)


@pytest.fixture
def target():
    return RemoteTarget(owner="octocat", repository="project")


@pytest.fixture
def api_config():
    return ApiConfig(token="test-token")


@pytest.fixture
def make_service(api_config):
    """Factory for a GitHubAPIService bound to a FakeGitHub."""

    def _make(fake: FakeGitHub, config: Optional[ApiConfig] = None) -> GitHubAPIService:
        return GitHubAPIService(config or api_config, transport=fake.transport)

    return _make
