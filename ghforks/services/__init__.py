"""
Services talking to the outside world: the local git configuration and
the GitHub REST API.
"""

from .github_api import GitHubAPIService, RequestBuilder
from .repository import get_remote_url, parse_remote_url, resolve_remote_target

__all__ = [
    "GitHubAPIService",
    "RequestBuilder",
    "get_remote_url",
    "parse_remote_url",
    "resolve_remote_target",
]
