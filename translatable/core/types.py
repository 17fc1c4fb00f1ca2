# translatable/core/types.py
"""
本模块定义了 translatable 系统的核心数据类型。

`LocaleKey` 是系统中唯一的“语言”值类型：无论调用方传入的是原始字符串，
还是由语言目录解析出的 `Language` 记录，都会被归一化为 `LocaleKey`，
并且只按 `code` 比较相等。
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


class Language(BaseModel):
    """语言目录中的一条语言记录。"""

    model_config = ConfigDict(from_attributes=True, frozen=True, extra="ignore")

    id: int | str | None = Field(default=None, description="语言记录的主键")
    code: str = Field(..., description="唯一的语言代码 (例如 'en', 'en-US')")

    def to_locale_key(self) -> LocaleKey:
        return LocaleKey(self.code, language_id=self.id)


@dataclass(frozen=True)
class LocaleKey:
    """一个语言代码的值对象。相等性与哈希只取决于 `code`。"""

    code: str
    language_id: int | str | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.code

    @classmethod
    def of(cls, value: LocaleLike | None) -> LocaleKey | None:
        """将字符串、`Language` 或 `LocaleKey` 统一转换为 `LocaleKey`。"""
        if value is None:
            return None
        if isinstance(value, LocaleKey):
            return value
        if isinstance(value, Language):
            return value.to_locale_key()
        if isinstance(value, str):
            return cls(value)
        raise TypeError(f"无法将 {type(value).__name__!r} 解释为语言代码。")

    def is_country_based(self, separator: str) -> bool:
        return separator in self.code

    def split(self, separator: str) -> tuple[str, str | None]:
        """按分隔符拆分为 (基础语言, 国家)。不含分隔符时国家为 None。"""
        if separator not in self.code:
            return self.code, None
        base, _, country = self.code.partition(separator)
        return base, country


LocaleLike = Union[str, LocaleKey, Language]

# 属性映射的通用别名
Attributes = dict[str, Any]
