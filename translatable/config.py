# translatable/config.py
"""
translatable 配置（Pydantic v2）

配置是进程级、只加载一次、解析期间只读的数据。它通过构造函数被显式地
传递给 LocaleCatalog / LanguageDirectory / TranslationResolver 等组件，
任何组件都不会去读取全局状态。
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from translatable.utils import validate_lang_codes

# locales 既可以是扁平列表 ["en", "fr"]，也可以是 基础语言 -> 国家 的映射
# {"en": ["US", "GB"]}，或两者混合的列表 ["fr", {"en": ["US"]}]。
LocaleTreeEntry = Union[str, dict[str, list[str]]]
LocaleTree = Union[list[LocaleTreeEntry], dict[str, list[str]]]


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    format: Literal["console", "json"] = Field(default="console")


class TranslatableConfig(BaseSettings):
    """
    translatable 核心配置模型。
    """

    # --- 语言 ---
    locales: LocaleTree = Field(default_factory=list)
    locale: str = Field(default="en", description="当前应用语言")
    fallback_locale: Optional[str] = Field(default=None)
    locale_key: str = Field(default="locale", min_length=1)
    locale_separator: str = Field(default="-", min_length=1)

    # --- 行为开关 ---
    use_fallback: bool = False
    use_property_fallback: bool = False
    to_array_always_loads_translations: bool = True

    # --- 子实体 / 语言目录 ---
    translation_suffix: str = Field(default="Translation")
    languages_table: str = Field(default="languages")
    language_code_column: str = Field(default="code")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # --- 校验器 ---
    @field_validator("locale")
    @classmethod
    def _validate_locale(cls, v: str) -> str:
        validate_lang_codes([v])
        return v

    @field_validator("fallback_locale")
    @classmethod
    def _validate_fallback(cls, v: Optional[str]) -> Optional[str]:
        if v in (None, ""):
            return None
        validate_lang_codes([v])
        return v

    # --- Pydantic v2 设置 ---
    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_prefix="TRANSLATABLE_",
        case_sensitive=False,
        extra="ignore",
        env_file_encoding="utf-8",
    )
