"""Rebuilds the time series and device info from the sample log."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path
from typing import Final

from battrack.models.sample import DeviceInfo, TimeSeriesPoint
from battrack.storage.records import ParsedRecord, parse_record
from battrack.system.buffer import SharedBuffer

logger: Final = logging.getLogger(__name__)


def load_records(path: Path, since: datetime | None = None) -> list[ParsedRecord]:
    """Parse every well-formed record of the log, in file order.

    The file is read in a single call, then parsed line by line. The
    first line is the header. Lines with too few fields (including a
    partially written last line) are skipped.

    Args:
        path: Log file location
        since: If given, drop records timestamped before this instant

    Returns:
        Parsed records; empty when the log does not exist

    Raises:
        OSError: If the log exists but cannot be read
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return []

    records: list[ParsedRecord] = []
    skipped = 0
    for line in text.splitlines()[1:]:
        record = parse_record(line)
        if record is None:
            skipped += 1
            continue
        if since is not None and record.timestamp is not None and record.timestamp < since:
            continue
        records.append(record)

    if skipped:
        logger.debug("Skipped %d malformed line(s) in %s", skipped, path)
    return records


def load_history(
    path: Path, since: datetime | None = None
) -> tuple[list[TimeSeriesPoint], DeviceInfo | None]:
    """Load the plotted series and the latest device info from the log.

    The device info reflects the last record that parsed.

    Returns:
        Tuple of (points in file order, last device info or None)
    """
    records = load_records(path, since)
    info = records[-1].info if records else None
    return [r.point for r in records], info


class HistoryLoader:
    """Reloads the sample log into a shared buffer."""

    def __init__(
        self,
        path: Path,
        buffer: SharedBuffer,
        history_hours: int | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the loader.

        Args:
            path: Log file location
            buffer: Buffer that receives each fresh series
            history_hours: Only keep records this many hours old or newer
            clock: Source of the current time
        """
        self.path = Path(path)
        self.buffer = buffer
        self.history_hours = history_hours
        self.clock = clock

    def refresh(self) -> bool:
        """Load the log and swap the result into the buffer.

        A log that has disappeared (e.g. rotated away) empties the buffer.

        Returns:
            True if the buffer was updated with records from the log
        """
        if not self.path.exists():
            if self.buffer.snapshot().points:
                logger.info("Sample log %s is gone; clearing the chart", self.path)
                self.buffer.replace([], None)
            else:
                logger.debug("Sample log %s does not exist yet", self.path)
            return False

        since = None
        if self.history_hours is not None:
            since = self.clock() - timedelta(hours=self.history_hours)

        try:
            records = load_records(self.path, since)
        except OSError as exc:
            logger.warning("Could not read sample log %s: %s", self.path, exc)
            return False

        self.buffer.replace(
            [r.point for r in records],
            records[-1].info if records else None,
            [r.timestamp for r in records],
        )
        logger.debug("Loaded %d point(s) from %s", len(records), self.path)
        return True
