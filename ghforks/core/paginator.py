"""
Page-by-page traversal of the forks endpoint.
"""

import json
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable, Iterator, List, Optional

import httpx

from ..models import ForkRecord, RemoteTarget, SortOrder
from ..services import GitHubAPIService, RequestBuilder
from ..infrastructure.error_handler import MalformedRecordError
from ..infrastructure.logger import logger


@dataclass
class Page:
    """One fetched, non-empty page of forks."""

    number: int
    items: List[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def records(self) -> Iterator[ForkRecord]:
        """Fork records in the order GitHub returned them."""

        for item in self.items:
            yield ForkRecord.from_json(item)


def has_next_page(response: httpx.Response) -> bool:
    """
    Tell whether the response announces a following page.

    Without a Link header the answer is unknown and the caller keeps going
    until it receives an empty page.
    """
    if "link" not in response.headers:
        return True
    return "next" in response.links


class ForkPaginator:
    """
    Lazily walks every page of the forks endpoint in increasing order.

    Each page is awaited before the next request is built, so pages and
    the records within them come out exactly in the order GitHub returned
    them.
    """

    def __init__(self, service: GitHubAPIService, builder: RequestBuilder):
        self.service = service
        self.builder = builder

    async def pages(
        self,
        target: RemoteTarget,
        sort_order: SortOrder,
        capture: Optional[Callable[[bytes], None]] = None
    ) -> AsyncIterator[Page]:
        """
        Yield each non-empty page, stopping at the first empty page or
        when the Link header has no `next` relation.

        Args:
            target: Repository whose forks are listed
            sort_order: Value of the `sort` query parameter
            capture: Receives the raw body of every non-empty page before
                it is validated or yielded

        Raises:
            MalformedRecordError: If a page is not a JSON array
        """
        number = 1
        while True:
            request = self.builder.forks(target, sort_order, number)
            response = await self.service.send(request)
            body = response.content

            try:
                data = json.loads(body)
            except ValueError as e:
                if capture:
                    capture(body)
                raise MalformedRecordError(f"Page {number} is not valid JSON", e)

            if data == []:
                logger.debug(f"Page {number} is empty, done")
                return

            if capture:
                capture(body)

            if not isinstance(data, list):
                raise MalformedRecordError(
                    f"Page {number} is a JSON {type(data).__name__}, expected an array"
                )

            logger.debug(f"Page {number}: {len(data)} forks")
            yield Page(number=number, items=data)

            if not has_next_page(response):
                logger.debug(f"Page {number} is the last page")
                return
            number += 1
