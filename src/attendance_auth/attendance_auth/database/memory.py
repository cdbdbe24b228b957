from __future__ import annotations

import itertools
import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

logger = logging.getLogger(__name__)

TABLES = (
    "positions",
    "employee_status",
    "attendance_status",
    "persons",
    "employees",
    "attendance",
    "auth_users",
)


class InMemoryDatabase:
    """Process-local store with the same transactional contract as MySQL.

    Tables are dicts of frozen dataclasses keyed by primary key. A single
    re-entrant lock serializes writers. The writing thread works on a copy of
    the committed tables; commit publishes the copy with one reference swap,
    rollback discards it. Other threads only ever see committed tables, and a
    committed dict is never mutated again, so lock-free readers can iterate it.
    Sequences are not rolled back (same as AUTO_INCREMENT).
    """

    def __init__(self) -> None:
        self._committed: Dict[str, Dict[Any, Any]] = {name: {} for name in TABLES}
        self._working: Optional[Dict[str, Dict[Any, Any]]] = None
        self._owner: Optional[int] = None
        self._sequences: Dict[str, Iterator[int]] = {}
        self._lock = threading.RLock()
        self._depth = 0

    @property
    def tables(self) -> Dict[str, Dict[Any, Any]]:
        working = self._working
        if working is not None and self._owner == threading.get_ident():
            return working
        return self._committed

    def next_id(self, table: str) -> int:
        with self._lock:
            seq = self._sequences.setdefault(table, itertools.count(1))
            return next(seq)

    @contextmanager
    def transaction(self) -> Iterator["InMemoryDatabase"]:
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield self
                finally:
                    self._depth -= 1
                return

            self._working = {name: dict(rows) for name, rows in self._committed.items()}
            self._owner = threading.get_ident()
            self._depth = 1
            try:
                yield self
                self._committed = self._working
            except Exception:
                logger.debug("rolling back in-memory transaction", exc_info=True)
                raise
            finally:
                self._owner = None
                self._working = None
                self._depth = 0
