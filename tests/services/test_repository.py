import subprocess

import pytest

from ghforks.infrastructure.error_handler import (
    MissingToolError,
    RepositoryResolutionError,
)
from ghforks.models import RemoteTarget
from ghforks.services import repository
from ghforks.services.repository import (
    get_remote_url,
    parse_remote_url,
    resolve_remote_target,
)


EXPECTED = RemoteTarget(owner="ejmr", repository="git-ls-github-forks")


# ---- Helpers ---------------------------------------------------------------

def fake_git(monkeypatch, returncode=0, stdout="", stderr=""):
    calls = []

    def fake_run(command, **kwargs):
        calls.append(command)
        return subprocess.CompletedProcess(command, returncode, stdout=stdout, stderr=stderr)

    monkeypatch.setattr(repository.subprocess, "run", fake_run)
    return calls


# ---- parse_remote_url ------------------------------------------------------

@pytest.mark.parametrize("url", [
    "https://github.com/ejmr/git-ls-github-forks",
    "https://github.com/ejmr/git-ls-github-forks.git",
    "https://github.com/ejmr/git-ls-github-forks/",
    "http://github.com/ejmr/git-ls-github-forks.git",
    "https://someone@github.com/ejmr/git-ls-github-forks.git",
    "git@github.com:ejmr/git-ls-github-forks.git",
    "git@github.com:ejmr/git-ls-github-forks",
    "github.com:ejmr/git-ls-github-forks.git",
    "ssh://git@github.com/ejmr/git-ls-github-forks.git",
    "ssh://git@github.com:22/ejmr/git-ls-github-forks",
    "git://github.com/ejmr/git-ls-github-forks.git",
    "  https://github.com/ejmr/git-ls-github-forks.git\n",
])
def test_parse_remote_url_supported_syntaxes(url):
    assert parse_remote_url(url) == EXPECTED


def test_parse_remote_url_only_strips_git_suffix():
    target = parse_remote_url("https://github.com/owner/my.gitrepo")
    assert target.repository == "my.gitrepo"


@pytest.mark.parametrize("url", [
    "",
    "origin",
    "/srv/git/project.git",
    "file:///srv/git/owner/project.git",
    "https://github.com/ejmr",
    "https://github.com/ejmr/git-ls-github-forks/tree/main",
    "https://github.com/",
    "git@github.com:project.git",
    "https://github.com/ejmr/.git",
])
def test_parse_remote_url_rejects_unknown_shapes(url):
    with pytest.raises(RepositoryResolutionError):
        parse_remote_url(url)


# ---- get_remote_url --------------------------------------------------------

def test_get_remote_url_runs_git(monkeypatch):
    calls = fake_git(monkeypatch, stdout="git@github.com:ejmr/git-ls-github-forks.git\n")
    assert get_remote_url() == "git@github.com:ejmr/git-ls-github-forks.git"
    assert calls == [["git", "ls-remote", "--get-url"]]


def test_get_remote_url_passes_remote_name(monkeypatch):
    calls = fake_git(monkeypatch, stdout="https://github.com/up/stream.git\n")
    get_remote_url("upstream")
    assert calls == [["git", "ls-remote", "--get-url", "upstream"]]


def test_get_remote_url_git_failure(monkeypatch):
    fake_git(monkeypatch, returncode=128, stderr="fatal: not a git repository\n")
    with pytest.raises(RepositoryResolutionError) as info:
        get_remote_url()
    assert "not a git repository" in str(info.value)


def test_get_remote_url_empty_output(monkeypatch):
    fake_git(monkeypatch, stdout="\n")
    with pytest.raises(RepositoryResolutionError):
        get_remote_url()


def test_get_remote_url_missing_git(monkeypatch):
    def fake_run(command, **kwargs):
        raise FileNotFoundError("git")

    monkeypatch.setattr(repository.subprocess, "run", fake_run)
    with pytest.raises(MissingToolError):
        get_remote_url()


# ---- resolve_remote_target -------------------------------------------------

def test_resolve_remote_target(monkeypatch):
    fake_git(monkeypatch, stdout="https://github.com/ejmr/git-ls-github-forks.git\n")
    assert resolve_remote_target() == EXPECTED


def test_resolve_remote_target_without_remote(monkeypatch):
    # git prints the default remote name when nothing is configured
    fake_git(monkeypatch, stdout="origin\n")
    with pytest.raises(RepositoryResolutionError):
        resolve_remote_target()
