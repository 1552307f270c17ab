from __future__ import annotations

import copy
import threading
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from loguru import logger

from errors import StorageError

TABLES = (
    "slang_terms",
    "food_items",
    "food_vendors",
    "users",
    "cultural_submissions",
    "recommendation_history",
)


def generate_id() -> str:
    return uuid.uuid4().hex


class InMemoryStore:
    """Thread-safe table store with all-or-nothing transactions.

    Records are copied on the way in and on the way out, so callers can never
    mutate stored state without going through ``insert``/``update``.
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[str, Any]] = {name: {} for name in TABLES}
        self._lock = threading.RLock()
        self._depth = 0

    def _table(self, name: str) -> Dict[str, Any]:
        try:
            return self._tables[name]
        except KeyError:
            raise StorageError(f"unknown table: {name}") from None

    @contextmanager
    def transaction(self) -> Iterator["InMemoryStore"]:
        with self._lock:
            outermost = self._depth == 0
            snapshot = copy.deepcopy(self._tables) if outermost else None
            self._depth += 1
            try:
                yield self
            except BaseException:
                if outermost:
                    self._tables = snapshot  # type: ignore[assignment]
                    logger.debug("transaction rolled back")
                raise
            finally:
                self._depth -= 1

    def insert(self, table: str, record: Any) -> Any:
        with self._lock:
            rows = self._table(table)
            if record.id is None:
                record.id = generate_id()
            if record.id in rows:
                raise StorageError(f"duplicate id {record.id} in {table}")
            rows[record.id] = copy.deepcopy(record)
            return copy.deepcopy(record)

    def get(self, table: str, record_id: str) -> Optional[Any]:
        with self._lock:
            row = self._table(table).get(record_id)
            return copy.deepcopy(row) if row is not None else None

    def replace(self, table: str, record: Any) -> Any:
        with self._lock:
            rows = self._table(table)
            if record.id not in rows:
                raise StorageError(f"missing id {record.id} in {table}")
            rows[record.id] = copy.deepcopy(record)
            return copy.deepcopy(record)

    def delete(self, table: str, record_id: str) -> bool:
        with self._lock:
            return self._table(table).pop(record_id, None) is not None

    def all(self, table: str) -> List[Any]:
        with self._lock:
            return [copy.deepcopy(row) for row in self._table(table).values()]

    def count(self, table: str) -> int:
        with self._lock:
            return len(self._table(table))
