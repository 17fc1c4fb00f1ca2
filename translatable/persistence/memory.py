# translatable/persistence/memory.py
"""
基于字典的进程内存储实现。

主要用于测试与嵌入式场景；支持按表注入保存失败，以便模拟存储层故障。
"""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

import structlog

from translatable.core.types import Attributes
from translatable.records import Record

logger = structlog.get_logger(__name__)

SaveFailurePredicate = Callable[[Record], bool]


class InMemoryRepository:
    """实现 `Repository` 协议；主键为每张表各自的自增整数。"""

    def __init__(self) -> None:
        self._tables: dict[str, dict[Any, Attributes]] = defaultdict(dict)
        self._primary_keys: dict[str, str] = {}
        self._sequences: dict[str, int] = defaultdict(int)
        self._failures: dict[str, SaveFailurePredicate] = {}
        # (操作, 表名, 主键) 的调用记录，便于断言保存顺序
        self.history: list[tuple[str, str, Any]] = []

    # ---- 测试辅助 ----

    def seed(
        self, table: str, rows: Iterable[Mapping[str, Any]], *, primary_key: str = "id"
    ) -> None:
        self._primary_keys[table] = primary_key
        for row in rows:
            key = row.get(primary_key)
            if key is None:
                key = self._next_key(table)
            self._sequences[table] = max(self._sequences[table], _as_int(key))
            self._tables[table][key] = {**row, primary_key: key}

    def fail_saves_for(
        self, table: str, predicate: SaveFailurePredicate | None = None
    ) -> None:
        self._failures[table] = predicate or (lambda record: True)

    def rows(self, table: str) -> list[Attributes]:
        return [dict(row) for row in self._tables[table].values()]

    def _next_key(self, table: str) -> int:
        self._sequences[table] += 1
        return self._sequences[table]

    # ---- Repository 协议 ----

    def find_where(self, table: str, column: str, value: Any) -> Record | None:
        primary_key = self._primary_keys.get(table, "id")
        for row in self._tables[table].values():
            if row.get(column) == value:
                return Record.from_row(table, row, primary_key=primary_key)
        return None

    def save(self, record: Record) -> bool:
        self.history.append(("save", record.table, record.key))
        failure = self._failures.get(record.table)
        if failure is not None and failure(record):
            logger.warning("模拟的保存失败。", table=record.table, key=record.key)
            return False

        self._primary_keys.setdefault(record.table, record.primary_key)
        table = self._tables[record.table]
        if not record.exists:
            key = record.key if record.key is not None else self._next_key(record.table)
            table[key] = {**record.to_dict(), record.primary_key: key}
            record.mark_persisted(key)
            return True

        row = table.get(record.key)
        if row is None:
            return False
        row.update(record.get_dirty())
        record.mark_persisted()
        return True

    def query_related(
        self, parent_key: Any, child_table: str, foreign_key: str
    ) -> Sequence[Record]:
        primary_key = self._primary_keys.get(child_table, "id")
        return [
            Record.from_row(child_table, row, primary_key=primary_key)
            for row in self._tables[child_table].values()
            if row.get(foreign_key) == parent_key
        ]

    def delete(self, record: Record) -> bool:
        self.history.append(("delete", record.table, record.key))
        removed = self._tables[record.table].pop(record.key, None)
        if removed is None:
            return False
        record.exists = False
        return True


def _as_int(key: Any) -> int:
    return key if isinstance(key, int) else 0
