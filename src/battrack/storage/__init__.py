"""Durable sample log: record codec, recorder and history loader."""

from battrack.storage.history import HistoryLoader, load_history, load_records
from battrack.storage.recorder import Recorder
from battrack.storage.records import HEADER, encode_record, parse_record

__all__ = [
    "HEADER",
    "HistoryLoader",
    "Recorder",
    "encode_record",
    "load_history",
    "load_records",
    "parse_record",
]
