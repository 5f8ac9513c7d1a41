"""Append-only writer for the sample log."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from battrack.errors import RecorderError
from battrack.models.sample import Sample
from battrack.storage.records import HEADER, encode_record
from battrack.utils.file import ensure_parent_directory, is_empty_or_missing

logger: Final = logging.getLogger(__name__)


class Recorder:
    """Appends samples to a CSV log, creating it with a header if absent."""

    def __init__(self, path: Path) -> None:
        """Initialize the recorder.

        Args:
            path: Log file location
        """
        self.path = Path(path)

    def append(self, sample: Sample) -> None:
        """Append one record, opening and closing the log around the write.

        Raises:
            RecorderError: If the log cannot be created or written
        """
        line = encode_record(sample)
        try:
            ensure_parent_directory(self.path)
            new_log = is_empty_or_missing(self.path)
            with self.path.open("a", encoding="utf-8") as f:
                if new_log:
                    f.write(HEADER + "\n")
                    logger.info("Created sample log %s", self.path)
                f.write(line + "\n")
        except OSError as exc:
            raise RecorderError(self.path, exc.strerror or str(exc)) from exc

        logger.debug("Recorded %s", line)
