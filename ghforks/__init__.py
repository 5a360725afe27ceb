"""
git-ls-github-forks: list the GitHub forks of the current repository.
"""

__version__ = "1.0.0"
NAME = "git-ls-github-forks"

__all__ = ["__version__", "NAME"]
