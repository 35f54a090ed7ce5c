"""
Print-set rendering.

Builds one standalone HTML document with a page-sized section per retained
CSV row. Column order always follows the file, never the selection order.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from .rules import (
    COMPANY_KEYWORDS,
    DEFAULT_DOCUMENT_TITLE,
    FALLBACK_TITLE,
    NAME_KEYWORDS,
    ROW_FILTER_DELIMITERS,
)

logger = logging.getLogger(__name__)

PRINT_CSS = """
  body { font-family: Arial, sans-serif; margin: 20px; }
  .application {
    page-break-after: always;
    margin-bottom: 40px;
    border: 1px solid #ccc;
    padding: 20px;
    min-height: calc(100vh - 80px);
  }
  .application:last-child { page-break-after: auto; }
  .field { margin-bottom: 15px; }
  .field-label {
    font-weight: bold;
    color: #333;
    margin-bottom: 5px;
  }
  .field-value {
    color: #666;
    line-height: 1.4;
    white-space: pre-wrap;
  }
  h1 { color: #333; margin-bottom: 20px; }
  @media print {
    body { margin: 0; }
    .application {
      border: none;
      padding: 15px;
    }
  }
"""


@dataclass
class PrintSet:
    ok: bool
    document: str = ""
    records: int = 0
    reason: Optional[str] = None


def escape(text: str) -> str:
    return html.escape(text, quote=True)


def resolve_column_indices(headers: List[str], selected: Iterable[str]) -> List[int]:
    selected = set(selected)
    return [i for i, title in enumerate(headers) if title in selected]


def parse_row_filter(text: Optional[str], row_count: int) -> Set[int]:
    """
    Parse free-text row numbers ("1, 4\\n7") into 1-based positions.

    Tokens that are not integers, and numbers outside 1..row_count, are
    dropped without complaint. An empty result means "no filter".
    """
    if not text:
        return set()

    for delimiter in ROW_FILTER_DELIMITERS[1:]:
        text = text.replace(delimiter, ROW_FILTER_DELIMITERS[0])

    positions: Set[int] = set()
    for token in text.split(ROW_FILTER_DELIMITERS[0]):
        token = token.strip()
        if not token:
            continue
        try:
            number = int(token)
        except ValueError:
            continue
        if 1 <= number <= row_count:
            positions.add(number)
    return positions


def filter_rows(rows: List[List[str]], row_filter: Set[int]) -> List[Tuple[int, List[str]]]:
    numbered = list(enumerate(rows, start=1))
    if not row_filter:
        return numbered
    return [(position, row) for position, row in numbered if position in row_filter]


def _find_header(headers: List[str], keywords: Tuple[str, ...]) -> int:
    for i, title in enumerate(headers):
        lowered = title.lower()
        if any(keyword in lowered for keyword in keywords):
            return i
    return -1


def _cell(row: List[str], index: int) -> str:
    if 0 <= index < len(row):
        return row[index]
    return ""


def record_title(headers: List[str], row: List[str], position: int) -> str:
    name = _cell(row, _find_header(headers, NAME_KEYWORDS)).strip()
    company = _cell(row, _find_header(headers, COMPANY_KEYWORDS)).strip()

    if name and company:
        return f"{name} - {company}"
    if name:
        return name
    return FALLBACK_TITLE.format(position=position)


def render_record(headers: List[str], row: List[str], position: int, indices: List[int]) -> str:
    parts = [
        '<div class="application">',
        f"<h1>{escape(record_title(headers, row, position))}</h1>",
    ]
    for index in indices:
        parts.append(
            '<div class="field">'
            f'<div class="field-label">{escape(headers[index])}:</div>'
            f'<div class="field-value">{escape(_cell(row, index))}</div>'
            "</div>"
        )
    parts.append("</div>")
    return "\n".join(parts)


def render_print_set(
    headers: List[str],
    rows: List[List[str]],
    selected: Iterable[str],
    row_filter: Optional[str] = None,
    title: str = DEFAULT_DOCUMENT_TITLE,
) -> str:
    indices = resolve_column_indices(headers, selected)
    retained = filter_rows(rows, parse_row_filter(row_filter, len(rows)))
    sections = "\n".join(render_record(headers, row, position, indices) for position, row in retained)

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{escape(title)}</title>
<style>{PRINT_CSS}</style>
</head>
<body>
{sections}
</body>
</html>
"""


def build_print_set(
    headers: List[str],
    rows: List[List[str]],
    selected: Iterable[str],
    row_filter: Optional[str] = None,
    title: str = DEFAULT_DOCUMENT_TITLE,
) -> PrintSet:
    """
    Render a print set, or report why there is nothing to print.

    Fails (ok=False) when there are no data rows or no selected column exists
    in the headers.
    """
    selected = set(selected)
    if not rows:
        logger.warning("print set refused: no data rows")
        return PrintSet(ok=False, reason="no data rows")
    if not resolve_column_indices(headers, selected):
        logger.warning("print set refused: no columns selected")
        return PrintSet(ok=False, reason="no columns selected")

    records = len(filter_rows(rows, parse_row_filter(row_filter, len(rows))))
    document = render_print_set(headers, rows, selected, row_filter, title)
    logger.info("rendered print set with %d records", records)
    return PrintSet(ok=True, document=document, records=records)
