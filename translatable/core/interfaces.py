# translatable/core/interfaces.py
"""定义了 translatable 所依赖的外部存储协作者的接口协议。"""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from translatable.records import Record


class Repository(Protocol):
    """
    存储层协议。

    本层只做同步、直接的调用：可能阻塞于 I/O，但不施加任何并发控制，
    超时与取消也由实现方负责。
    """

    def find_where(self, table: str, column: str, value: Any) -> Record | None:
        """返回 `table` 中 `column == value` 的第一条记录，不存在时返回 None。"""
        ...

    def save(self, record: Record) -> bool:
        """
        插入或更新一条记录。

        成功时实现方必须回写主键、将记录标记为已存在并同步其原始值
        (即调用 `record.mark_persisted(...)`)。失败返回 False。
        """
        ...

    def query_related(
        self, parent_key: Any, child_table: str, foreign_key: str
    ) -> Sequence[Record]:
        """返回 `child_table` 中外键 `foreign_key == parent_key` 的全部记录。"""
        ...

    def delete(self, record: Record) -> bool:
        """删除一条已存在的记录，返回是否成功。"""
        ...
