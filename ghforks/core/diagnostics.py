"""
Capture of raw API responses in a temporary file for debugging.
"""

import tempfile
from pathlib import Path
from typing import BinaryIO, Optional

from ..infrastructure.error_handler import MissingToolError


FILE_PREFIX = "github.json."


class DiagnosticsSink:
    """
    Append-only temporary file holding every page body fetched in a run.

    The file is created on enter, closed on exit whatever the outcome, and
    never deleted; cleaning the temp directory is left to the system.
    """

    def __init__(self, directory: Optional[Path] = None):
        self.directory = directory
        self.path: Optional[Path] = None
        self.bytes_written = 0
        self._file: Optional[BinaryIO] = None

    def __enter__(self) -> "DiagnosticsSink":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._file is None

    def open(self) -> Path:
        """Create the uniquely named file and open it for appending."""

        try:
            handle = tempfile.NamedTemporaryFile(
                mode="ab",
                prefix=FILE_PREFIX,
                dir=self.directory,
                delete=False,
            )
        except OSError as e:
            raise MissingToolError("cannot create temporary file", e)

        self._file = handle
        self.path = Path(handle.name)
        return self.path

    def write(self, body: bytes) -> None:
        """Append a raw response body unchanged."""

        if self._file is None:
            raise RuntimeError("DiagnosticsSink is not open")
        self._file.write(body)
        self._file.flush()
        self.bytes_written += len(body)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
