"""I/O: export codec, row mapping, state store and payloads."""

from .csv_codec import ParsedTable, parse_csv, serialize_csv
from .payload import InvalidPayloadError, loads_state, state_from_payload, state_to_payload
from .record_adapter import ColumnIndex, load_issues, merge_rows
from .store import TaskStore

__all__ = [
    "ParsedTable",
    "parse_csv",
    "serialize_csv",
    "ColumnIndex",
    "load_issues",
    "merge_rows",
    "TaskStore",
    "InvalidPayloadError",
    "state_from_payload",
    "state_to_payload",
    "loads_state",
]
