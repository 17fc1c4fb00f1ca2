# translatable/model.py
"""
TranslatableModel：带多语言内容的父实体。

子类通过类属性声明表名与可翻译字段，例如::

    class Country(TranslatableModel):
        table = "countries"
        translated_attributes = ("name",)

    country = Country(context, {"code": "gr", "name:en": "Greece"})
    country.get("name:de")
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Optional

import structlog

from translatable.core.types import Attributes, Language, LocaleKey, LocaleLike
from translatable.persistence.coordinator import PersistenceCoordinator
from translatable.records import Record, TranslationRecord
from translatable.router import AttributeRouter
from translatable.translation_set import TranslationSet
from translatable.utils import snake_case

if TYPE_CHECKING:
    from translatable.context import TranslationContext

logger = structlog.get_logger(__name__)


class TranslatableModel:
    """父实体。可翻译字段只存在于译文记录上，但对外表现得像实体自身的属性。"""

    table: ClassVar[str] = ""
    primary_key: ClassVar[str] = "id"
    translated_attributes: ClassVar[tuple[str, ...]] = ()
    hidden: ClassVar[tuple[str, ...]] = ()

    # 以下为可选覆盖，缺省时由配置推导
    translation_model: ClassVar[Optional[str]] = None
    translation_table: ClassVar[Optional[str]] = None
    translation_foreign_key: ClassVar[Optional[str]] = None
    locale_key: ClassVar[Optional[str]] = None
    use_translation_fallback: ClassVar[Optional[bool]] = None

    def __init__(
        self,
        context: "TranslationContext",
        attributes: Mapping[str, Any] | None = None,
    ):
        self.context = context
        self.record = Record(self.get_table(), primary_key=self.primary_key)
        self._router = AttributeRouter(self)
        self._translations: TranslationSet | None = None
        self._default_locale: LocaleKey | None = None
        if attributes:
            self.fill(attributes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.record.to_dict()!r}, exists={self.exists})"

    # ---- 构造 / 查询 ----

    @classmethod
    def from_record(cls, context: "TranslationContext", record: Record) -> TranslatableModel:
        entity = cls(context)
        entity.record = record
        return entity

    @classmethod
    def find(cls, context: "TranslationContext", key: Any) -> TranslatableModel | None:
        record = context.repository.find_where(cls.get_table(), cls.primary_key, key)
        if record is None:
            return None
        return cls.from_record(context, record)

    @classmethod
    def get_table(cls) -> str:
        return cls.table or f"{snake_case(cls.__name__)}s"

    # ---- 基本状态 ----

    @property
    def key(self) -> Any:
        return self.record.key

    @property
    def exists(self) -> bool:
        return self.record.exists

    def is_dirty(self) -> bool:
        return self.record.is_dirty()

    # ---- 命名约定 ----

    def translation_model_name(self) -> str:
        if self.translation_model:
            return self.translation_model
        return type(self).__name__ + self.context.config.translation_suffix

    def translations_table(self) -> str:
        if self.translation_table:
            return self.translation_table
        return f"{snake_case(self.translation_model_name())}s"

    @classmethod
    def relation_key(cls) -> str:
        if cls.translation_foreign_key:
            return cls.translation_foreign_key
        if cls.primary_key != "id":
            return cls.primary_key
        return f"{snake_case(cls.__name__)}_{cls.primary_key}"

    def get_locale_key(self) -> str:
        return self.locale_key or self.context.config.locale_key

    def is_translation_attribute(self, key: str) -> bool:
        return key in self.translated_attributes

    # ---- 当前语言 ----

    def set_default_locale(self, locale: LocaleLike | None) -> TranslatableModel:
        self._default_locale = LocaleKey.of(locale)
        return self

    def get_default_locale(self) -> LocaleKey | None:
        return self._default_locale

    def locale(self) -> str:
        if self._default_locale is not None:
            return self._default_locale.code
        return self.context.config.locale

    def locale_language(self) -> LocaleKey:
        """当前语言，经语言目录解析；目录中不存在时为裸 LocaleKey。"""
        if self._default_locale is not None:
            return self._default_locale
        return self.context.languages.resolve(self.locale())

    def use_fallback(self) -> bool:
        if self.use_translation_fallback is not None:
            return self.use_translation_fallback
        return self.context.config.use_fallback

    # ---- 译文集合 ----

    def _new_translation_record(self) -> TranslationRecord:
        return TranslationRecord(self.translations_table(), locale_key=self.get_locale_key())

    @property
    def relation_loaded(self) -> bool:
        return self._translations is not None

    @property
    def translations(self) -> TranslationSet:
        if self._translations is None:
            return self.load_translations()
        return self._translations

    def load_translations(self) -> TranslationSet:
        locale_key = self.get_locale_key()
        records: list[TranslationRecord] = []
        if self.exists:
            related = self.context.repository.query_related(
                self.key, self.translations_table(), self.relation_key()
            )
            records = [TranslationRecord.from_record(r, locale_key=locale_key) for r in related]
        self._translations = TranslationSet(
            self._new_translation_record, records, locale_key=locale_key
        )
        logger.debug(
            "译文已加载。", table=self.record.table, key=self.key, count=len(records)
        )
        return self._translations

    # ---- 译文解析 ----

    def get_translation(
        self, locale: LocaleLike | None = None, with_fallback: bool | None = None
    ) -> TranslationRecord | None:
        requested = LocaleKey.of(locale) or self.locale_language()
        if with_fallback is None:
            with_fallback = self.use_fallback()
        return self.context.resolver.resolve(requested, with_fallback, self.translations)

    def translate(
        self, locale: LocaleLike | None = None, with_fallback: bool = False
    ) -> TranslationRecord | None:
        return self.get_translation(locale, with_fallback)

    def translate_or_default(self, locale: LocaleLike) -> TranslationRecord | None:
        return self.get_translation(locale, True)

    def get_translation_or_new(self, locale: LocaleLike) -> TranslationRecord:
        translation = self.get_translation(locale, False)
        if translation is None:
            translation = self.get_new_translation(locale)
        return translation

    def translate_or_new(self, locale: LocaleLike) -> TranslationRecord:
        return self.get_translation_or_new(locale)

    def get_new_translation(self, locale: LocaleLike) -> TranslationRecord:
        return self.translations.create(locale)

    def has_translation(self, locale: LocaleLike | None = None) -> bool:
        requested = LocaleKey.of(locale) or self.locale_language()
        return self.translations.find(requested) is not None

    def get_attribute_or_fallback(self, locale: LocaleLike, attribute: str) -> Any:
        return self.context.resolver.resolve_field(
            locale, attribute, self.use_fallback(), self.translations
        )

    # ---- 属性访问 ----

    def get(self, key: str) -> Any:
        return self._router.get_attribute(key)

    def set(self, key: str, value: Any) -> TranslatableModel:
        self._router.set_attribute(key, value)
        return self

    def fill(self, attributes: Mapping[str, Any]) -> TranslatableModel:
        remaining = self._router.fill(attributes)
        self.record.fill(remaining)
        return self

    def has_attribute(self, key: str) -> bool:
        return self.is_translation_attribute(key) or self.record.has(key)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has_attribute(key)

    # ---- 保存 / 删除 ----

    def save(self) -> bool:
        coordinator = PersistenceCoordinator(self.context.repository, self.context.events)
        return coordinator.save(self.record, self._translations, self.relation_key())

    def delete_translations(self, locales: LocaleLike | Iterable[LocaleLike] | None = None) -> int:
        """删除全部译文，或仅删除给定语言的译文；随后重新加载集合。"""
        wanted: set[LocaleKey] | None = None
        if locales is not None:
            single = isinstance(locales, (str, LocaleKey, Language))
            items = [locales] if single else list(locales)
            wanted = {key for key in map(LocaleKey.of, items) if key is not None}

        deleted = 0
        if self.exists:
            locale_key = self.get_locale_key()
            related = self.context.repository.query_related(
                self.key, self.translations_table(), self.relation_key()
            )
            for record in related:
                if wanted is not None and LocaleKey.of(record.get(locale_key)) not in wanted:
                    continue
                if self.context.repository.delete(record):
                    deleted += 1

        # 手动“重新加载”集合，否则内存中的集合与存储不一致
        self.load_translations()
        return deleted

    def replicate_with_translations(
        self, except_: Iterable[str] | None = None
    ) -> TranslatableModel:
        replica = type(self)(self.context)
        replica.record = self.record.replicate(except_)
        replica._default_locale = self._default_locale
        replica._translations = TranslationSet(
            replica._new_translation_record,
            (t.replicate() for t in self.translations),
            locale_key=self.get_locale_key(),
        )
        return replica

    # ---- 导出 ----

    def to_dict(self) -> Attributes:
        attributes = {
            k: v for k, v in self.record.to_dict().items() if k not in self.hidden
        }
        if not (
            self.relation_loaded
            or self.context.config.to_array_always_loads_translations
        ):
            return attributes

        for field in self.translated_attributes:
            if field in self.hidden:
                continue
            translation = self.get_translation()
            if translation is not None:
                attributes[field] = translation.get(field)
        return attributes

    def get_translations_dict(self) -> dict[str, Attributes]:
        result: dict[str, Attributes] = {}
        for record in self.translations:
            locale = record.locale
            if locale is None:
                continue
            result[locale.code] = {
                attr: record.get(attr) for attr in self.translated_attributes
            }
        return result
