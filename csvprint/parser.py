"""
CSV ingestion.

Responsibilities:
- decode uploaded bytes to text (UTF-8 first, best guess otherwise)
- split text into a header row and data rows with a quote-aware scanner

Nothing here raises on malformed input: bad quoting, ragged rows and blank
lines degrade to best-effort extraction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from charset_normalizer import from_bytes

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


@dataclass
class CsvTable:
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)


def _has_content(row: List[str]) -> bool:
    return any(cell.strip() != "" for cell in row)


def decode_csv_bytes(raw: bytes) -> str:
    """
    Decode an upload to text.

    Rules:
    - A leading UTF-8 BOM is dropped.
    - UTF-8 is tried first.
    - If that fails, charset-normalizer's best guess is used.
    - Last resort is UTF-8 with replacement characters, so parsing can continue.
    """
    if raw.startswith(_UTF8_BOM):
        raw = raw[len(_UTF8_BOM):]

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass

    match = from_bytes(raw).best()
    if match is not None:
        try:
            text = raw.decode(match.encoding)
        except (LookupError, UnicodeDecodeError):
            text = None
        if text is not None:
            logger.warning("upload is not UTF-8, decoded as %s", match.encoding)
            return text

    logger.warning("could not detect upload encoding, decoding UTF-8 with replacement")
    return raw.decode("utf-8", errors="replace")


def parse_csv_text(text: str) -> CsvTable:
    """
    Scan `text` once, left to right, into a CsvTable.

    A doubled quote inside a quoted field is a literal quote. CRLF counts as a
    single row terminator. Rows whose fields are all blank are dropped, and the
    first surviving row becomes the header.
    """
    rows: List[List[str]] = []
    current_row: List[str] = []
    current_field: List[str] = []
    in_quotes = False
    i = 0
    n = len(text)

    def end_row() -> None:
        current_row.append("".join(current_field).strip())
        if _has_content(current_row):
            rows.append(list(current_row))
        current_row.clear()
        current_field.clear()

    while i < n:
        char = text[i]
        next_char = text[i + 1] if i + 1 < n else ""

        if char == '"':
            if in_quotes and next_char == '"':
                current_field.append('"')
                i += 2
            else:
                in_quotes = not in_quotes
                i += 1
        elif char == "," and not in_quotes:
            current_row.append("".join(current_field).strip())
            current_field.clear()
            i += 1
        elif char in ("\n", "\r") and not in_quotes:
            end_row()
            i += 2 if char == "\r" and next_char == "\n" else 1
        else:
            current_field.append(char)
            i += 1

    # input without a trailing terminator
    if current_field or current_row:
        end_row()

    headers = rows[0] if rows else []
    data_rows = [row for row in rows[1:] if row and _has_content(row)]

    logger.debug("parsed %d columns, %d data rows", len(headers), len(data_rows))
    return CsvTable(headers=headers, rows=data_rows)


def parse_csv_bytes(raw: bytes) -> CsvTable:
    return parse_csv_text(decode_csv_bytes(raw))
