# tests/unit/test_utils.py
"""针对 `translatable.utils` 模块的单元测试。"""

import pytest

from translatable.utils import is_empty_value, snake_case, validate_lang_codes


@pytest.mark.parametrize(
    "valid_codes",
    [
        ["en"],
        ["zh-CN"],
        ["de", "fr", "es-419"],
        ["en-US"],
        ["EN"],
        ["en_GB"],
        ["zh-Hant"],
    ],
)
def test_validate_lang_codes_accepts_valid_tags(valid_codes: list[str]) -> None:
    """测试有效的和可标准化的语言代码都能通过校验，不引发异常。"""
    validate_lang_codes(valid_codes)


@pytest.mark.parametrize("invalid_code", ["german", "e", "123"])
def test_validate_lang_codes_rejects_invalid_tags(invalid_code: str) -> None:
    """测试无效的语言代码会引发 ValueError，并带有中文包装信息。"""
    with pytest.raises(ValueError) as excinfo:
        validate_lang_codes([invalid_code])
    assert f"提供的语言代码 '{invalid_code}' 格式无效" in str(excinfo.value)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, True),
        ("", True),
        ([], True),
        ({}, True),
        ("x", False),
        (0, False),
        (False, False),
        ([0], False),
    ],
)
def test_is_empty_value(value, expected: bool) -> None:
    assert is_empty_value(value) is expected


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Country", "country"),
        ("CountryTranslation", "country_translation"),
        ("BlogPost", "blog_post"),
    ],
)
def test_snake_case(name: str, expected: str) -> None:
    assert snake_case(name) == expected
