# translatable/resolver.py
"""
包含译文解析（语言回退链）的核心逻辑。
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from translatable.core.types import LocaleKey, LocaleLike
from translatable.utils import is_empty_value

if TYPE_CHECKING:
    from translatable.config import TranslatableConfig
    from translatable.locales import LocaleCatalog
    from translatable.records import TranslationRecord
    from translatable.translation_set import TranslationSet

logger = structlog.get_logger(__name__)


class TranslationResolver:
    """
    负责执行译文解析的核心业务逻辑：精确匹配、国家语言回退、全局回退。

    解析器是无状态的：对固定的输入与集合内容，结果总是相同，
    并且解析过程从不修改 TranslationSet。
    """

    def __init__(self, config: "TranslatableConfig", catalog: "LocaleCatalog"):
        """
        初始化解析器。

        Args:
            config: 进程级配置。
            catalog: 已加载的语言目录，用于判断国家语言的基础部分是否有效。
        """
        self._catalog = catalog
        self._default_locale = config.locale
        self._global_fallback = LocaleKey.of(config.fallback_locale)
        self._use_fallback = config.use_fallback
        self._use_property_fallback = config.use_property_fallback

    @property
    def global_fallback(self) -> LocaleKey | None:
        return self._global_fallback

    def effective_with_fallback(self, with_fallback: bool | None) -> bool:
        return self._use_fallback if with_fallback is None else with_fallback

    def fallback_locale_for(self, requested: LocaleLike | None = None) -> LocaleKey | None:
        """
        计算请求语言的回退语言。

        'de-AT' 且 'de' 为有效语言时回退到 'de'；否则回退到全局配置的 fallback_locale。
        """
        if requested is not None:
            parts = self._catalog.decompose(requested)
            if parts is not None:
                base = parts[0]
                if base and self._catalog.is_valid_locale(base):
                    return LocaleKey(base)
        return self._global_fallback

    def resolve(
        self,
        requested: LocaleLike | None,
        with_fallback: bool | None,
        translations: "TranslationSet",
    ) -> "TranslationRecord | None":
        """
        按回退链解析译文记录，命中即返回。

        这是系统“读模型”的核心算法。找不到译文不是错误，返回 None。
        """
        locale = LocaleKey.of(requested) or LocaleKey(self._default_locale)
        use_fallback = self.effective_with_fallback(with_fallback)

        # 1. 精确匹配
        record = translations.find(locale)
        if record is not None:
            logger.debug("解析成功: 精确匹配", locale=locale.code)
            return record

        fallback = self.fallback_locale_for(locale)
        if not use_fallback or fallback is None:
            logger.debug("解析失败: 未启用回退", locale=locale.code)
            return None

        # 2. 计算出的回退语言（国家语言的基础部分，或全局回退）
        logger.debug("正在尝试语言回退", locale=locale.code, fallback=fallback.code)
        record = translations.find(fallback)
        if record is not None:
            logger.debug("解析成功: 语言回退命中", locale=locale.code, hit=fallback.code)
            return record

        # 3. 总是再尝试一次全局回退语言，即使它与第 2 步相同
        if self._global_fallback is not None:
            record = translations.find(self._global_fallback)
            if record is not None:
                logger.debug(
                    "解析成功: 全局回退命中",
                    locale=locale.code,
                    hit=self._global_fallback.code,
                )
                return record

        logger.debug("解析失败: 所有回退均未命中", locale=locale.code)
        return None

    def resolve_field(
        self,
        requested: LocaleLike | None,
        attribute: str,
        with_fallback: bool | None,
        translations: "TranslationSet",
    ) -> Any:
        """
        解析单个字段的值。

        记录级解析成功后，如果字段值为空，且回退与 use_property_fallback 均启用，
        则改用全局回退语言的记录中该字段的值。
        """
        record = self.resolve(requested, with_fallback, translations)
        if record is None:
            return None

        value = record.get(attribute)
        use_property_fallback = (
            self.effective_with_fallback(with_fallback) and self._use_property_fallback
        )
        if is_empty_value(value) and use_property_fallback:
            fallback_record = self.resolve(self._global_fallback, True, translations)
            if fallback_record is None:
                return None
            logger.debug(
                "字段值为空，使用回退语言的值",
                attribute=attribute,
                fallback=fallback_record.get(translations.locale_key),
            )
            return fallback_record.get(attribute)

        return value
