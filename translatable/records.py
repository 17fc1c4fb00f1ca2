# translatable/records.py
"""
内存中的记录对象：一个属性字典加上一份“原始值”快照，用于脏值检测。

存储层在保存成功后调用 `mark_persisted()`，记录随即变为“干净”。
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from translatable.core.types import Attributes, LocaleKey

_MISSING = object()


class Record:
    """一条持久化记录（父实体或子译文记录共用）。"""

    def __init__(
        self,
        table: str,
        attributes: Mapping[str, Any] | None = None,
        *,
        primary_key: str = "id",
        exists: bool = False,
    ):
        self.table = table
        self.primary_key = primary_key
        self.exists = exists
        self._attributes: Attributes = dict(attributes or {})
        self._original: Attributes = dict(self._attributes) if exists else {}

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(table={self.table!r}, "
            f"attributes={self._attributes!r}, exists={self.exists})"
        )

    @classmethod
    def from_row(
        cls, table: str, row: Mapping[str, Any], *, primary_key: str = "id"
    ) -> Record:
        """从存储层读出的一行构造一条已存在且干净的记录。"""
        return cls(table, row, primary_key=primary_key, exists=True)

    # ---- 属性读写 ----

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def fill(self, attributes: Mapping[str, Any]) -> Record:
        for key, value in attributes.items():
            self.set(key, value)
        return self

    def has(self, key: str) -> bool:
        return key in self._attributes

    def forget(self, key: str) -> None:
        self._attributes.pop(key, None)

    @property
    def key(self) -> Any:
        return self._attributes.get(self.primary_key)

    @property
    def attributes(self) -> Attributes:
        return dict(self._attributes)

    @property
    def original(self) -> Attributes:
        return dict(self._original)

    # ---- 脏值检测 ----

    def get_dirty(self) -> Attributes:
        """返回与原始值不同（或原始值中不存在）的属性。"""
        return {
            key: value
            for key, value in self._attributes.items()
            if self._original.get(key, _MISSING) != value
        }

    def is_dirty(self, *keys: str) -> bool:
        dirty = self.get_dirty()
        if not keys:
            return bool(dirty)
        return any(key in dirty for key in keys)

    def sync_original(self) -> None:
        self._original = dict(self._attributes)

    def mark_persisted(self, key: Any = None) -> None:
        if key is not None:
            self._attributes[self.primary_key] = key
        self.exists = True
        self.sync_original()

    # ---- 复制 / 导出 ----

    def _new_instance(self, attributes: Attributes) -> Record:
        return type(self)(self.table, attributes, primary_key=self.primary_key)

    def replicate(self, except_: Iterable[str] | None = None) -> Record:
        """复制为一条新的、未保存的记录，去掉主键和 `except_` 中的字段。"""
        excluded = {self.primary_key, *(except_ or ())}
        attributes = {k: v for k, v in self._attributes.items() if k not in excluded}
        return self._new_instance(attributes)

    def to_dict(self) -> Attributes:
        return dict(self._attributes)


class TranslationRecord(Record):
    """每个 (父实体, 语言) 对应的一条译文记录。"""

    def __init__(
        self,
        table: str,
        attributes: Mapping[str, Any] | None = None,
        *,
        locale_key: str = "locale",
        primary_key: str = "id",
        exists: bool = False,
    ):
        super().__init__(table, attributes, primary_key=primary_key, exists=exists)
        self.locale_key = locale_key

    @classmethod
    def from_record(cls, record: Record, *, locale_key: str = "locale") -> TranslationRecord:
        return cls(
            record.table,
            record.to_dict(),
            locale_key=locale_key,
            primary_key=record.primary_key,
            exists=record.exists,
        )

    @property
    def locale(self) -> LocaleKey | None:
        return LocaleKey.of(self.get(self.locale_key))

    def _new_instance(self, attributes: Attributes) -> TranslationRecord:
        return type(self)(
            self.table,
            attributes,
            locale_key=self.locale_key,
            primary_key=self.primary_key,
        )
