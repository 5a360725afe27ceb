"""
Orchestrator tying the fork-listing pipeline together:
pagination, diagnostics capture and formatting.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..models import RateLimitStatus, RemoteTarget, RunConfig
from ..services import GitHubAPIService, RequestBuilder
from .diagnostics import DiagnosticsSink
from .formatter import ForkFormatter, OwnerAnnotation
from .paginator import ForkPaginator

from ghforks.infrastructure.logger import logger


# Same layout as date(1) without arguments
RESET_TIME_FORMAT = "%a %b %d %H:%M:%S %Z %Y"


####
##      LISTING STATISTICS MODEL
#####
@dataclass
class ListingStatistics:
    """Counters for one fork listing."""

    pages: int = 0
    forks: int = 0
    bytes_received: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def duration_seconds(self) -> float:
        """Get total duration in seconds."""

        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0


def format_rate_limit(status: RateLimitStatus) -> str:
    """Render the quota as a single status line."""

    reset = status.reset_at.strftime(RESET_TIME_FORMAT)
    return f"Status: {status.remaining} remaining API requests until {reset}"


####
##      FORK LISTER
#####
class ForkLister:
    """
    Lists the forks of a repository page by page, streaming formatted
    lines to a caller-supplied callback as each page arrives.
    """

    def __init__(
        self,
        github_service: GitHubAPIService,
        request_builder: RequestBuilder,
        config: RunConfig
    ):
        self.github_service = github_service
        self.request_builder = request_builder
        self.config = config
        self.paginator = ForkPaginator(github_service, request_builder)
        self.formatter = ForkFormatter(
            config.output_format,
            OwnerAnnotation.from_flag(config.show_owner),
        )

    async def list_forks(
        self,
        target: RemoteTarget,
        sink: DiagnosticsSink,
        emit: Callable[[str], None]
    ) -> ListingStatistics:
        """
        Fetch every page of forks and emit one line per fork.

        Args:
            target: Repository whose forks are listed
            sink: Open sink receiving each raw page body before formatting
            emit: Called with each output line, in order, as soon as its
                page has been fetched

        Returns:
            ListingStatistics for the run

        Raises:
            UpstreamRequestError: If any page request fails
            MalformedRecordError: If a page or record has an unexpected shape
        """
        logger.debug(
            f"Listing forks of {target.display_name} "
            f"sorted by {self.config.sort_order.value}"
        )

        stats = ListingStatistics(start_time=datetime.now())

        def capture(body: bytes) -> None:
            sink.write(body)
            stats.bytes_received += len(body)

        async for page in self.paginator.pages(
            target, self.config.sort_order, capture=capture
        ):
            stats.pages += 1
            for line in self.formatter.format_page(page.records()):
                emit(line)
                stats.forks += 1

        stats.end_time = datetime.now()
        logger.debug(
            f"Listed {stats.forks} forks from {stats.pages} pages "
            f"({stats.bytes_received} bytes) in {stats.duration_seconds:.2f}s"
        )
        return stats

    async def get_rate_limit(self) -> RateLimitStatus:
        """Query the API quota without touching the forks endpoint."""

        response = await self.github_service.send(self.request_builder.rate_limit())
        try:
            data = response.json()
        except ValueError:
            data = None
        return RateLimitStatus.from_json(data)

    async def report_rate_limit(self) -> str:
        """Return the quota as the status line shown to the user."""

        return format_rate_limit(await self.get_rate_limit())
