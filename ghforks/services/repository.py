"""
Resolution of the GitHub owner/repository from the local git configuration.
"""

import re
import subprocess
from typing import Optional
from urllib.parse import urlparse

from ..models import RemoteTarget
from ..infrastructure.error_handler import (
    MissingToolError,
    RepositoryResolutionError,
)
from ..infrastructure.logger import logger


URL_SCHEMES = ('http', 'https', 'ssh', 'git', 'git+ssh', 'ssh+git')

# user@host:OWNER/REPO[.git]
SCP_LIKE_PATTERN = re.compile(r'^(?:[^@/\s]+@)?(?P<host>[^:/\s]+):(?P<path>[^\s]+)$')


def get_remote_url(remote: Optional[str] = None) -> str:
    """
    Ask git for the URL of a remote of the current repository.

    Args:
        remote: Remote name; when None git picks the default remote

    Returns:
        The configured remote URL

    Raises:
        MissingToolError: If git is not installed
        RepositoryResolutionError: If git cannot report a URL
    """
    command = ['git', 'ls-remote', '--get-url']
    if remote:
        command.append(remote)

    try:
        completed = subprocess.run(
            command, capture_output=True, text=True, check=False
        )
    except FileNotFoundError as e:
        raise MissingToolError("missing git program", e)

    if completed.returncode != 0:
        detail = completed.stderr.strip() or f"exit status {completed.returncode}"
        raise RepositoryResolutionError(f"Cannot read remote URL: {detail}")

    url = completed.stdout.strip()
    if not url:
        raise RepositoryResolutionError("No remote URL is configured")

    logger.debug(f"Remote URL: {url}")
    return url


def _split_path(path: str) -> RemoteTarget:
    segments = [segment for segment in path.strip('/').split('/') if segment]
    if len(segments) != 2:
        raise RepositoryResolutionError(
            f"Expected OWNER/REPOSITORY in remote path, got {path!r}"
        )

    owner, repository = segments
    if repository.endswith('.git'):
        repository = repository[:-len('.git')]

    return RemoteTarget(owner=owner, repository=repository)


def parse_remote_url(url: str) -> RemoteTarget:
    """
    Extract owner and repository from a remote URL.

    Understands `https://host/OWNER/REPO[.git]`, `ssh://`/`git://` URLs
    of the same shape and scp-like `user@host:OWNER/REPO[.git]`.
    """
    url = url.strip()

    if '://' in url:
        parsed = urlparse(url)
        if parsed.scheme.lower() not in URL_SCHEMES or not parsed.hostname:
            raise RepositoryResolutionError(f"Unrecognized remote URL: {url}")
        return _split_path(parsed.path)

    match = SCP_LIKE_PATTERN.match(url)
    if match:
        return _split_path(match.group('path'))

    raise RepositoryResolutionError(f"Unrecognized remote URL: {url}")


def resolve_remote_target(remote: Optional[str] = None) -> RemoteTarget:
    """Resolve the GitHub repository the local repository points at."""

    target = parse_remote_url(get_remote_url(remote))
    logger.debug(f"Resolved repository {target.display_name}")
    return target


__all__ = [
    "get_remote_url",
    "parse_remote_url",
    "resolve_remote_target",
]
