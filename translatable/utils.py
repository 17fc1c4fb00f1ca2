# translatable/utils.py
"""本模块包含项目范围内的通用工具函数。"""

import re
from collections.abc import Sized
from typing import Any

from langcodes import Language
from langcodes.tag_parser import LanguageTagError

# 语言子标签应该由 2-3 个字母组成 (BCP 47)
LANGUAGE_SUBTAG_PATTERN = re.compile(r"^[a-zA-Z]{2,3}$")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def validate_lang_codes(lang_codes: list[str]) -> None:
    """使用 `langcodes` 库校验语言代码列表中的每个代码是否符合 BCP 47 规范。"""
    for code in lang_codes:
        try:
            lang = Language.get(code)
            if not lang.language or not LANGUAGE_SUBTAG_PATTERN.match(lang.language):
                raise LanguageTagError(
                    f"Tag '{code}' lacks a valid 2-3 letter language subtag."
                )
        except LanguageTagError as e:
            raise ValueError(f"提供的语言代码 '{code}' 格式无效。原因: {e}") from e


def is_empty_value(value: Any) -> bool:
    """
    判断一个字段值是否为“空”。

    None 与长度为 0 的值 (空字符串、空列表、空字典) 视为空；
    0 与 False 是有意义的值，不视为空。
    """
    if value is None:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def snake_case(name: str) -> str:
    """'CountryTranslation' -> 'country_translation'"""
    return _CAMEL_BOUNDARY.sub("_", name).lower()
