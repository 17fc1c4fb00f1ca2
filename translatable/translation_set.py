# translatable/translation_set.py
"""
TranslationSet：挂在单个父实体上的译文记录集合（内存中）。

集合由持有它的父实体独占，不做任何加锁。
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from translatable.core.types import LocaleKey, LocaleLike
from translatable.records import TranslationRecord

RecordFactory = Callable[[], TranslationRecord]


class TranslationSet:
    """按语言查找、按需创建、判定脏值的译文记录集合。"""

    def __init__(
        self,
        factory: RecordFactory,
        records: Iterable[TranslationRecord] = (),
        *,
        locale_key: str = "locale",
    ):
        self._factory = factory
        self._locale_key = locale_key
        self._records: list[TranslationRecord] = list(records)

    def __iter__(self) -> Iterator[TranslationRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"TranslationSet(locales={[str(loc) for loc in self.locales()]!r})"

    @property
    def locale_key(self) -> str:
        return self._locale_key

    def find(self, locale: LocaleLike | None) -> TranslationRecord | None:
        # 按值比较：字符串和目录解析出的语言只要 code 相同即视为相等
        wanted = LocaleKey.of(locale)
        if wanted is None:
            return None
        for record in self._records:
            if LocaleKey.of(record.get(self._locale_key)) == wanted:
                return record
        return None

    def get_or_create(self, locale: LocaleLike) -> TranslationRecord:
        record = self.find(locale)
        if record is None:
            record = self.create(locale)
        return record

    def create(self, locale: LocaleLike) -> TranslationRecord:
        """构造一条未保存的新记录，设置其语言字段并加入集合。"""
        key = LocaleKey.of(locale)
        if key is None:
            raise ValueError("创建译文记录时必须指定语言。")
        record = self._factory()
        record.set(self._locale_key, key.code)
        self._records.append(record)
        return record

    def add(self, record: TranslationRecord) -> None:
        self._records.append(record)

    def clear(self) -> None:
        self._records.clear()

    def is_dirty(self, record: TranslationRecord) -> bool:
        """除语言字段本身之外，至少有一个字段被修改。"""
        dirty = record.get_dirty()
        dirty.pop(self._locale_key, None)
        return len(dirty) > 0

    def dirty_records(self) -> list[TranslationRecord]:
        return [record for record in self._records if self.is_dirty(record)]

    def locales(self) -> list[LocaleKey]:
        keys = (LocaleKey.of(record.get(self._locale_key)) for record in self._records)
        return [key for key in keys if key is not None]
