# translatable/languages.py
"""
LanguageDirectory：把外部的语言代码映射到语言目录中的 `Language` 记录。
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

from translatable.core.types import Language, LocaleKey

if TYPE_CHECKING:
    from translatable.config import TranslatableConfig
    from translatable.core.interfaces import Repository

logger = structlog.get_logger(__name__)


class LanguageDirectory:
    """
    语言目录。

    `lookup_by_code` 只发起一次存储层调用；如果目录已预载了语言列表
    (见 `preload`)，则直接在内存中查找，不访问存储层。
    """

    def __init__(
        self,
        config: "TranslatableConfig",
        repository: "Repository",
        preloaded: Iterable[Language] | None = None,
    ):
        self._table = config.languages_table
        self._code_column = config.language_code_column
        self._fallback_code = config.fallback_locale
        self._repository = repository
        self._preloaded: list[Language] | None = (
            list(preloaded) if preloaded is not None else None
        )

    @property
    def code_column(self) -> str:
        return self._code_column

    def preload(self, languages: Iterable[Language]) -> None:
        self._preloaded = list(languages)

    def lookup_by_code(self, code: str) -> Language | None:
        if self._preloaded is not None:
            for language in self._preloaded:
                if language.code == code:
                    return language
            return None

        record = self._repository.find_where(self._table, self._code_column, code)
        if record is None:
            logger.debug("语言目录未命中。", code=code, table=self._table)
            return None
        attributes = record.to_dict()
        attributes.setdefault("code", attributes.get(self._code_column))
        return Language.model_validate(attributes)

    def fallback_code(self) -> str | None:
        return self._fallback_code

    def fallback_identifier(self) -> Language | None:
        code = self.fallback_code()
        if not code:
            return None
        return self.lookup_by_code(code)

    def resolve(self, code: str) -> LocaleKey:
        """返回目录中的语言（若存在），否则返回一个裸的 `LocaleKey`。"""
        language = self.lookup_by_code(code)
        if language is None:
            return LocaleKey(code)
        return language.to_locale_key()
