"""
Fork listing pipeline.
"""

from .diagnostics import DiagnosticsSink
from .formatter import ForkFormatter, OwnerAnnotation
from .orchestrator import ForkLister, ListingStatistics, format_rate_limit
from .paginator import ForkPaginator, Page

__all__ = [
    "DiagnosticsSink",
    "ForkFormatter",
    "OwnerAnnotation",
    "ForkLister",
    "ListingStatistics",
    "format_rate_limit",
    "ForkPaginator",
    "Page",
]
