"""
Projection of fork records onto output lines.
"""

from enum import Enum
from typing import Iterable, Iterator

from ..models import ForkRecord, OutputFormat
from ..infrastructure.error_handler import MalformedRecordError


class OwnerAnnotation(Enum):
    """Whether each output line carries the fork owner's login."""

    ANNOTATE = "annotate"
    PLAIN = "plain"

    @classmethod
    def from_flag(cls, show_owner: bool) -> "OwnerAnnotation":
        return cls.ANNOTATE if show_owner else cls.PLAIN


class ForkFormatter:
    """Turns each ForkRecord into exactly one line of output."""

    def __init__(
        self,
        output_format: OutputFormat = OutputFormat.GIT,
        owner_annotation: OwnerAnnotation = OwnerAnnotation.PLAIN
    ):
        self.output_format = output_format
        self.owner_annotation = owner_annotation

    def format(self, record: ForkRecord) -> str:
        """
        Format a single fork.

        Raises:
            MalformedRecordError: If the selected URL field, or the owner
                login when annotating, is missing
        """
        field_name = self.output_format.field_name
        url = getattr(record, field_name)
        if not url:
            raise MalformedRecordError(f"Fork record has no {field_name}")

        if self.owner_annotation is OwnerAnnotation.PLAIN:
            return url

        if not record.owner_login:
            raise MalformedRecordError(f"Fork {url} has no owner.login")
        return f"{url} {record.owner_login}"

    def format_page(self, records: Iterable[ForkRecord]) -> Iterator[str]:
        """Format records lazily, preserving their order."""

        for record in records:
            yield self.format(record)
