"""Delimited text codec for issue-tracker exports.

Reads and writes the comma-separated layout produced by tracker exports:
quoted fields, doubled quotes, and commas or newlines inside quotes.
The parser never rejects input; it returns a best-effort split.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

QUOTE = '"'
DELIMITER = ","


@dataclass
class ParsedTable:
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)


def _split_records(text: str) -> List[List[str]]:
    records: List[List[str]] = []
    record: List[str] = []
    buf: List[str] = []
    in_quotes = False
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if in_quotes:
            if ch == QUOTE:
                if i + 1 < n and text[i + 1] == QUOTE:
                    buf.append(QUOTE)
                    i += 2
                    continue
                in_quotes = False
            else:
                buf.append(ch)
            i += 1
            continue

        if ch == QUOTE:
            in_quotes = True
            i += 1
        elif ch == DELIMITER:
            record.append("".join(buf))
            buf = []
            i += 1
        elif ch == "\n" or (ch == "\r" and i + 1 < n and text[i + 1] == "\n"):
            record.append("".join(buf))
            buf = []
            records.append(record)
            record = []
            i += 2 if ch == "\r" else 1
        else:
            buf.append(ch)
            i += 1

    # Trailing record without a terminating newline
    if buf or record:
        record.append("".join(buf))
        records.append(record)
    return records


def parse_csv(text: str) -> ParsedTable:
    """
    Parse export text into a header row and data rows.

    Rows consisting of a single empty field are blank lines and are dropped.
    """
    records = _split_records(text)
    if not records:
        return ParsedTable()
    headers = records[0]
    rows = [r for r in records[1:] if len(r) > 1 or r[0] != ""]
    return ParsedTable(headers=headers, rows=rows)


def escape_field(value) -> str:
    text = "" if value is None else str(value)
    if DELIMITER in text or QUOTE in text or "\n" in text or "\r" in text:
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text


def serialize_csv(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render headers and rows; every row is fitted to the header width."""
    width = len(headers)
    lines = [DELIMITER.join(escape_field(h) for h in headers)]
    for row in rows:
        cells = [row[i] if i < len(row) else "" for i in range(width)]
        lines.append(DELIMITER.join(escape_field(c) for c in cells))
    return "\n".join(lines) + "\n"
