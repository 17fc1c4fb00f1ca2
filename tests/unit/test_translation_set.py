# tests/unit/test_translation_set.py
"""针对 `translatable.translation_set.TranslationSet` 的单元测试。"""

import pytest

from tests.helpers.factories import make_translation_set
from translatable.core.types import Language, LocaleKey


def test_find_compares_by_value() -> None:
    """测试字符串、LocaleKey 与 Language 都能找到同一条记录。"""
    translations = make_translation_set({"en": {"name": "Greece"}})
    record = translations.find("en")
    assert record is not None
    assert translations.find(LocaleKey("en")) is record
    assert translations.find(Language(id=1, code="en")) is record
    assert translations.find("fr") is None
    assert translations.find(None) is None


def test_get_or_create_is_visible_to_find_without_reload() -> None:
    translations = make_translation_set()
    created = translations.get_or_create("fr")
    assert created.exists is False
    assert created.get("locale") == "fr"
    assert translations.find("fr") is created
    # 再次调用返回同一条记录，不会重复创建
    assert translations.get_or_create("fr") is created
    assert len(translations) == 1


def test_get_or_create_returns_existing_record() -> None:
    translations = make_translation_set({"en": {"name": "Greece"}})
    assert translations.get_or_create("en").get("name") == "Greece"
    assert len(translations) == 1


def test_create_requires_a_locale() -> None:
    with pytest.raises(ValueError):
        make_translation_set().create(None)  # type: ignore[arg-type]


def test_record_with_only_locale_set_is_not_dirty() -> None:
    """测试只设置了语言字段的新记录不算脏；再修改一个字段即为脏。"""
    translations = make_translation_set()
    record = translations.get_or_create("fr")
    assert translations.is_dirty(record) is False

    record.set("name", "Grèce")
    assert translations.is_dirty(record) is True
    assert translations.dirty_records() == [record]


def test_persisted_record_becomes_dirty_only_after_change() -> None:
    translations = make_translation_set({"en": {"name": "Greece"}})
    record = translations.find("en")
    assert record is not None
    assert translations.is_dirty(record) is False
    record.set("name", "Greece")
    assert translations.is_dirty(record) is False
    record.set("name", "Hellas")
    assert translations.is_dirty(record) is True


def test_custom_locale_key() -> None:
    translations = make_translation_set({"de": {"name": "Griechenland"}}, locale_key="lang")
    assert translations.find("de") is not None
    created = translations.get_or_create("fr")
    assert created.get("lang") == "fr"
    assert translations.is_dirty(created) is False
    assert [key.code for key in translations.locales()] == ["de", "fr"]
