"""Text encoding of samples in the comma-delimited log.

Each record is one line::

    2025-5-3 9:30:0,9,30,55.00,DELL 5XJ28,discharging,212,48.10,51.00,26.45,11.90

The first line of every log is :data:`HEADER`. Parsing is lenient: a line
with too few fields is dropped, and numeric fields that do not parse are
either reported as None or, for the plotted values, treated as 0.0.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

from battrack.common.enums import ChargeState
from battrack.models.sample import DeviceInfo, Sample, TimeSeriesPoint, sanitize_model

FIELDS: Final = (
    "timestamp",
    "hour",
    "minute",
    "percentage",
    "model",
    "state",
    "cycle_count",
    "energy_full",
    "energy_full_design",
    "energy",
    "voltage",
)
HEADER: Final = ",".join(FIELDS)
DELIMITER: Final = ","
TIMESTAMP_FORMAT: Final = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class ParsedRecord:
    """A log line decoded into its plotted point and descriptive fields."""

    timestamp: datetime | None
    point: TimeSeriesPoint
    info: DeviceInfo


def format_timestamp(ts: datetime) -> str:
    """Format a timestamp as the log writes it (no zero padding)."""
    return f"{ts.year}-{ts.month}-{ts.day} {ts.hour}:{ts.minute}:{ts.second}"


def encode_record(sample: Sample) -> str:
    """Encode a sample as one log line, without the trailing newline."""
    ts = sample.timestamp
    cycles = "" if sample.cycle_count is None else str(sample.cycle_count)
    return DELIMITER.join(
        [
            format_timestamp(ts),
            str(ts.hour),
            str(ts.minute),
            f"{sample.percentage:.2f}",
            sanitize_model(sample.model),
            sample.state.value,
            cycles,
            f"{sample.energy_full:.2f}",
            f"{sample.energy_full_design:.2f}",
            f"{sample.energy:.2f}",
            f"{sample.voltage:.2f}",
        ]
    )


def parse_float(text: str) -> float | None:
    """Parse a float, returning None when the text is not a number."""
    try:
        return float(text.strip())
    except ValueError:
        return None


def parse_float_or_zero(text: str) -> float:
    """Parse a float, treating anything unparsable as 0.0.

    This is the policy for plotted values: a damaged hour, minute or
    percentage field still yields a point rather than dropping the line.
    """
    value = parse_float(text)
    return 0.0 if value is None else value


def parse_int(text: str) -> int | None:
    """Parse an integer, returning None when the text is not one."""
    try:
        return int(text.strip())
    except ValueError:
        return None


def parse_timestamp(text: str) -> datetime | None:
    """Parse the log timestamp field, returning None if it is malformed."""
    try:
        return datetime.strptime(text.strip().strip('"'), TIMESTAMP_FORMAT)
    except ValueError:
        return None


def parse_record(line: str) -> ParsedRecord | None:
    """Decode one log line.

    Args:
        line: A record line, with or without its line terminator

    Returns:
        The decoded record, or None if the line has fewer fields than the
        header or is the header itself
    """
    line = line.rstrip("\r\n")
    if line == HEADER:
        return None
    parts = line.split(DELIMITER)
    if len(parts) < len(FIELDS):
        return None

    hour = parse_float_or_zero(parts[1])
    minute = parse_float_or_zero(parts[2])
    percentage = parse_float_or_zero(parts[3])
    timestamp = parse_timestamp(parts[0])

    info = DeviceInfo(
        model=parts[4].strip(),
        state=ChargeState.parse(parts[5]),
        cycle_count=parse_int(parts[6]),
        energy_full=parse_float(parts[7]),
        energy_full_design=parse_float(parts[8]),
        energy=parse_float(parts[9]),
        voltage=parse_float(parts[10]),
        timestamp=timestamp,
    )
    return ParsedRecord(
        timestamp=timestamp,
        point=TimeSeriesPoint(hour + minute / 60.0, percentage),
        info=info,
    )
