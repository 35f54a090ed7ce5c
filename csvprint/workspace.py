"""
In-memory load/selection state for the interactive flow.

A load is two steps: `begin_load` hands out a token before the upload is
read, `complete_load` installs the parsed table only if that token is still
the latest one. A slower, older read therefore never overwrites a newer file.
"""

from __future__ import annotations

import itertools
import logging
from typing import List, Optional, Set

from .models import WorkspaceState
from .parser import CsvTable, parse_csv_text
from .render import PrintSet, build_print_set
from .rules import DEFAULT_DOCUMENT_TITLE

logger = logging.getLogger(__name__)


class Workspace:
    def __init__(self, document_title: str = DEFAULT_DOCUMENT_TITLE):
        self.document_title = document_title
        self.filename: Optional[str] = None
        self.table = CsvTable()
        self.selected: Set[str] = set()
        self._tokens = itertools.count(1)
        self._latest = 0
        self._pending_filename: Optional[str] = None

    @property
    def headers(self) -> List[str]:
        return self.table.headers

    @property
    def rows(self) -> List[List[str]]:
        return self.table.rows

    def begin_load(self, filename: Optional[str] = None) -> int:
        self._latest = next(self._tokens)
        self._pending_filename = filename
        return self._latest

    def complete_load(self, token: int, text: str) -> bool:
        if token != self._latest:
            logger.info("dropping stale load %d (latest is %d)", token, self._latest)
            return False

        self.table = parse_csv_text(text)
        self.filename = self._pending_filename
        self.selected = set(self.table.headers)
        logger.info(
            "loaded %s: %d columns, %d rows",
            self.filename, self.table.column_count, self.table.row_count,
        )
        return True

    def toggle_column(self, name: str) -> bool:
        """Flip `name` in the selection and return whether it is now selected."""
        if name not in self.table.headers:
            raise KeyError(name)
        if name in self.selected:
            self.selected.discard(name)
            return False
        self.selected.add(name)
        return True

    def select_all(self) -> None:
        self.selected = set(self.table.headers)

    def select_none(self) -> None:
        self.selected = set()

    def selected_in_order(self) -> List[str]:
        # headers may repeat a name; report it once
        seen: Set[str] = set()
        ordered = []
        for title in self.table.headers:
            if title in self.selected and title not in seen:
                seen.add(title)
                ordered.append(title)
        return ordered

    def print_set(self, row_filter: Optional[str] = None) -> PrintSet:
        return build_print_set(
            self.table.headers,
            self.table.rows,
            self.selected,
            row_filter,
            title=self.document_title,
        )

    def snapshot(self) -> WorkspaceState:
        return WorkspaceState(
            filename=self.filename,
            headers=list(self.table.headers),
            selected=self.selected_in_order(),
            row_count=self.table.row_count,
            printable=bool(self.selected) and self.table.row_count > 0,
        )
