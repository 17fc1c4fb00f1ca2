# translatable/router.py
"""
AttributeRouter：拦截父实体上的属性读写。

可翻译字段经由 TranslationResolver / TranslationSet 处理，其余字段直接
落到实体自身的记录上。键可以写成 'title' 或 'title:fr'，显式语言优先。
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from translatable.core.types import LocaleKey

if TYPE_CHECKING:
    from translatable.model import TranslatableModel

KEY_SEPARATOR = ":"


class AttributeRouter:
    def __init__(self, entity: "TranslatableModel"):
        self._entity = entity

    @staticmethod
    def split_key(key: str) -> tuple[str, LocaleKey | None]:
        """'title:fr' -> ('title', LocaleKey('fr'))；'title' -> ('title', None)。"""
        if KEY_SEPARATOR in key:
            attribute, locale = key.split(KEY_SEPARATOR)[:2]
            return attribute, LocaleKey(locale)
        return key, None

    def _apply_accessor(self, attribute: str, value: Any) -> Any:
        accessor = getattr(self._entity, f"get_{attribute}_attribute", None)
        if callable(accessor):
            return accessor(value)
        return value

    def get_attribute(self, key: str) -> Any:
        attribute, locale = self.split_key(key)
        entity = self._entity

        if entity.is_translation_attribute(attribute):
            locale = locale or entity.locale_language()
            if entity.get_translation(locale) is None:
                return None
            value = entity.get_attribute_or_fallback(locale, attribute)
            return self._apply_accessor(attribute, value)

        return self._apply_accessor(key, entity.record.get(key))

    def set_attribute(self, key: str, value: Any) -> None:
        attribute, locale = self.split_key(key)
        entity = self._entity

        if entity.is_translation_attribute(attribute):
            locale = locale or entity.locale_language()
            entity.get_translation_or_new(locale).set(attribute, value)
        else:
            entity.record.set(key, value)

    def fill(self, attributes: Mapping[str, Any]) -> dict[str, Any]:
        """
        分发译文条目，返回剩余的普通属性。

        键本身是一个已配置语言时，整个子映射写入该语言的译文记录；
        'attr:locale' 形式的键单独写入。被消费的条目会从结果中移除。
        """
        entity = self._entity
        catalog = entity.context.catalog
        remaining = dict(attributes)

        for key, values in attributes.items():
            if catalog.is_valid_locale(key):
                entity.get_translation_or_new(LocaleKey(key)).fill(values)
                del remaining[key]
                continue
            attribute, locale = self.split_key(key)
            if (
                locale is not None
                and entity.is_translation_attribute(attribute)
                and catalog.is_valid_locale(locale)
            ):
                entity.get_translation_or_new(locale).fill({attribute: values})
                del remaining[key]

        return remaining
