# translatable/locales.py
"""
LocaleCatalog：解析已配置的语言代码集合，并支持“基于国家”的语言拆分。

配置 `{"en": ["US", "GB"]}` 会展开为有效集合 `["en", "en-US", "en-GB"]`。
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from translatable.core.exceptions import LocalesNotConfiguredError
from translatable.core.types import LocaleKey, LocaleLike

if TYPE_CHECKING:
    from translatable.config import LocaleTree, TranslatableConfig

logger = structlog.get_logger(__name__)


class LocaleCatalog:
    """已配置语言的只读目录。构造时若 locales 为空则立即失败。"""

    def __init__(self, config: "TranslatableConfig"):
        self._separator = config.locale_separator
        self._fallback_locale = config.fallback_locale
        self._locales = self._expand(config.locales, self._separator)
        if not self._locales:
            raise LocalesNotConfiguredError(
                "未定义任何语言。请确认已配置 locales"
                "（例如 TRANSLATABLE_LOCALES='[\"en\", \"fr\"]'）。"
            )
        self._valid = frozenset(self._locales)
        logger.debug("语言目录已加载。", locales=self._locales)

    @staticmethod
    def _expand(tree: "LocaleTree", separator: str) -> list[str]:
        entries = [tree] if isinstance(tree, dict) else list(tree or [])
        expanded: list[str] = []
        for entry in entries:
            if isinstance(entry, str):
                expanded.append(entry)
                continue
            for base, countries in entry.items():
                expanded.append(base)
                expanded.extend(f"{base}{separator}{c}" for c in countries)
        # 去重但保持顺序
        return list(dict.fromkeys(expanded))

    @property
    def locales(self) -> list[str]:
        return list(self._locales)

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def fallback_locale(self) -> str | None:
        return self._fallback_locale

    def is_valid_locale(self, code: LocaleLike | None) -> bool:
        key = LocaleKey.of(code)
        return key is not None and key.code in self._valid

    def decompose(self, code: LocaleLike) -> tuple[str, str] | None:
        """'en-US' -> ('en', 'US')；不含分隔符时返回 None。"""
        key = LocaleKey.of(code)
        if key is None or not key.is_country_based(self._separator):
            return None
        base, country = key.split(self._separator)
        return base, country or ""
