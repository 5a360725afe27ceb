"""
Core data models API surface for ghforks.

This file re-exports model classes from domain-specific modules so that
imports like `from ghforks.models import X` keep working.
"""

from .github import (
    RemoteTarget,
    ForkRecord,
    RateLimitStatus,
)
from .config import (
    OutputFormat,
    SortOrder,
    RunConfig,
    ApiConfig,
)

__all__ = [
    # GitHub models
    "RemoteTarget",
    "ForkRecord",
    "RateLimitStatus",
    # Config models
    "OutputFormat",
    "SortOrder",
    "RunConfig",
    "ApiConfig",
]
