# translatable/persistence/queries.py
"""
为 TranslatableModel 子类构建 SQLAlchemy 查询表达式。

`*_clause` 方法返回可自由组合的条件（例如用 `or_()` 拼接）；
其余方法返回完整的 `Select`，交由调用方执行。
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from sqlalchemy import ColumnElement, Select, Table, and_, exists, or_, select

if TYPE_CHECKING:
    from translatable.context import TranslationContext
    from translatable.model import TranslatableModel
    from translatable.persistence.sql import SqlAlchemyRepository


class TranslationQueries:
    def __init__(
        self,
        model: type["TranslatableModel"],
        context: "TranslationContext",
        repository: "SqlAlchemyRepository",
    ):
        prototype = model(context)
        self._context = context
        self._parent: Table = repository.table(model.get_table())
        self._translations: Table = repository.table(prototype.translations_table())
        self._primary_key = model.primary_key
        self._relation_key = model.relation_key()
        self._locale_key = prototype.get_locale_key()
        self._current_locale = prototype.locale()
        self._use_fallback = prototype.use_fallback()

    @property
    def parent_table(self) -> Table:
        return self._parent

    @property
    def translations_table(self) -> Table:
        return self._translations

    def _fallback_locale(self) -> str | None:
        fallback = self._context.resolver.fallback_locale_for(None)
        return fallback.code if fallback is not None else None

    def _exists(self, *conditions: ColumnElement[bool]) -> ColumnElement[bool]:
        t = self._translations
        return exists().where(
            t.c[self._relation_key] == self._parent.c[self._primary_key], *conditions
        )

    # ---- 条件 ----

    def translated_in_clause(self, locale: str | None = None) -> ColumnElement[bool]:
        return self._exists(self._translations.c[self._locale_key] == (locale or self._current_locale))

    def translation_clause(
        self, key: str, value: Any, locale: str | None = None, *, like: bool = False
    ) -> ColumnElement[bool]:
        t = self._translations
        conditions = [t.c[key].like(value) if like else t.c[key] == value]
        if locale:
            lc = t.c[self._locale_key]
            conditions.append(lc.like(locale) if like else lc == locale)
        return self._exists(*conditions)

    # ---- 完整查询 ----

    def translated_in(self, locale: str | None = None) -> Select:
        return select(self._parent).where(self.translated_in_clause(locale))

    def not_translated_in(self, locale: str | None = None) -> Select:
        return select(self._parent).where(~self.translated_in_clause(locale))

    def translated(self) -> Select:
        return select(self._parent).where(self._exists())

    def where_translation(
        self, key: str, value: Any, locale: str | None = None, *, like: bool = False
    ) -> Select:
        return select(self._parent).where(self.translation_clause(key, value, locale, like=like))

    def lists_translations(self, field: str) -> Select:
        """
        返回 (父主键, 译文字段) 列表，使用当前语言；
        启用回退时，对没有当前语言译文的父实体改用回退语言。
        """
        p, t = self._parent, self._translations
        locale_col = t.c[self._locale_key]
        condition: ColumnElement[bool] = locale_col == self._current_locale

        fallback = self._fallback_locale()
        if self._use_fallback and fallback:
            already_translated = select(t.c[self._relation_key]).where(
                locale_col == self._current_locale
            )
            condition = or_(
                condition,
                and_(
                    locale_col == fallback,
                    t.c[self._relation_key].not_in(already_translated),
                ),
            )

        return (
            select(p.c[self._primary_key], t.c[field])
            .select_from(p.outerjoin(t, t.c[self._relation_key] == p.c[self._primary_key]))
            .where(condition)
        )

    def with_translation_locales(self) -> list[str]:
        """预加载时只需要的语言：当前语言，以及启用回退时的回退语言。"""
        locales = [self._current_locale]
        fallback = self._fallback_locale()
        if self._use_fallback and fallback and fallback not in locales:
            locales.append(fallback)
        return locales

    def with_translation(self, parent_keys: Iterable[Any]) -> Select:
        t = self._translations
        return select(t).where(
            t.c[self._relation_key].in_(list(parent_keys)),
            t.c[self._locale_key].in_(self.with_translation_locales()),
        )
