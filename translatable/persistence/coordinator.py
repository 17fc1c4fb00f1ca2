# translatable/persistence/coordinator.py
"""
PersistenceCoordinator：把父实体与其脏译文记录作为一个逻辑单元保存。

顺序保证：父记录提交成功之后，才会尝试提交任何译文记录（外键有效性）。
跨记录不做事务回滚：某条译文保存失败时，之前已保存的记录保持已提交状态。
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog

from translatable.events import ModelCreated, ModelSaved, ModelUpdated

if TYPE_CHECKING:
    from translatable.core.interfaces import Repository
    from translatable.events import EventDispatcher
    from translatable.records import Record
    from translatable.translation_set import TranslationSet

logger = structlog.get_logger(__name__)


class PersistenceCoordinator:
    """编排父记录与译文记录的保存，结果以布尔值报告。"""

    def __init__(self, repository: "Repository", events: "EventDispatcher"):
        self._repository = repository
        self._events = events

    def save(
        self,
        parent: "Record",
        translations: Optional["TranslationSet"],
        relation_key: str,
    ) -> bool:
        if not parent.exists:
            # 只有父记录插入成功后才保存译文
            if self._save_parent(parent, created=True):
                return self.save_translations(parent, translations, relation_key)
            return False

        if parent.is_dirty():
            # 父记录更新失败时，译文一律不保存
            if self._save_parent(parent, created=False):
                return self.save_translations(parent, translations, relation_key)
            return False

        # 父记录干净：跳过父记录保存，直接保存译文，并手动补发生命周期事件
        saved = self.save_translations(parent, translations, relation_key)
        if saved:
            self._events.dispatch(ModelSaved(table=parent.table, key=parent.key))
            self._events.dispatch(ModelUpdated(table=parent.table, key=parent.key))
        return saved

    def save_translations(
        self,
        parent: "Record",
        translations: Optional["TranslationSet"],
        relation_key: str,
    ) -> bool:
        if translations is None:
            return True

        for record in translations:
            if not translations.is_dirty(record):
                continue
            record.set(relation_key, parent.key)
            if not self._repository.save(record):
                logger.warning(
                    "译文记录保存失败，停止保存剩余译文。",
                    table=record.table,
                    parent_key=parent.key,
                    locale=record.get(translations.locale_key),
                )
                return False
        return True

    def _save_parent(self, parent: "Record", *, created: bool) -> bool:
        if not self._repository.save(parent):
            logger.warning("父记录保存失败，译文不会被保存。", table=parent.table, key=parent.key)
            return False

        event = ModelCreated if created else ModelUpdated
        self._events.dispatch(event(table=parent.table, key=parent.key))
        self._events.dispatch(ModelSaved(table=parent.table, key=parent.key))
        return True
