# tests/unit/test_resolver.py
"""
对 TranslationResolver 的回退链进行单元测试。

覆盖精确匹配、国家语言回退、全局回退、禁用回退，以及字段级回退。
"""

import pytest

from tests.helpers.factories import make_config, make_translation_set
from translatable.locales import LocaleCatalog
from translatable.resolver import TranslationResolver


def make_resolver(**overrides) -> TranslationResolver:
    config = make_config(**overrides)
    return TranslationResolver(config, LocaleCatalog(config))


@pytest.fixture
def scenario_set():
    return make_translation_set({"en": {"title": "Hello"}, "fr": {"title": "Bonjour"}})


def test_scenario_direct_fallback_and_strict(scenario_set) -> None:
    """场景：请求 fr 直接命中；请求 de 带回退得到 en；不带回退得到 None。"""
    resolver = make_resolver()

    fr = resolver.resolve("fr", True, scenario_set)
    assert fr is not None and fr.get("title") == "Bonjour"

    de = resolver.resolve("de", True, scenario_set)
    assert de is not None and de.get("title") == "Hello"

    assert resolver.resolve("de", False, scenario_set) is None


def test_global_fallback_when_base_locale_is_not_configured() -> None:
    """'de' 不是有效语言时，de-AT 回退到全局 en（第 3 步）。"""
    resolver = make_resolver(locales=["en", "de-AT"])
    translations = make_translation_set({"en": {"title": "Hello"}})

    record = resolver.resolve("de-AT", True, translations)
    assert record is not None
    assert record.get("locale") == "en"


def test_country_fallback_precedes_global_fallback() -> None:
    """集合中同时有 de 与 en 时，de-AT 先回退到 de（第 2 步先于第 3 步）。"""
    resolver = make_resolver()
    translations = make_translation_set({"en": {"title": "Hello"}, "de": {"title": "Hallo"}})

    record = resolver.resolve("de-AT", True, translations)
    assert record is not None
    assert record.get("locale") == "de"


def test_country_fallback_misses_then_global_is_probed() -> None:
    resolver = make_resolver()
    translations = make_translation_set({"en": {"title": "Hello"}})

    record = resolver.resolve("de-CH", True, translations)
    assert record is not None
    assert record.get("locale") == "en"


@pytest.mark.parametrize("locale", ["de", "de-AT", "es-MX", "it"])
def test_without_fallback_absent_locale_is_none(scenario_set, locale: str) -> None:
    resolver = make_resolver()
    assert resolver.resolve(locale, False, scenario_set) is None


def test_no_global_fallback_configured() -> None:
    resolver = make_resolver(fallback_locale=None)
    translations = make_translation_set({"en": {"title": "Hello"}, "de": {"title": "Hallo"}})

    assert resolver.resolve("fr", True, translations) is None
    # 国家语言的基础部分仍可作为回退
    hit = resolver.resolve("de-AT", True, translations)
    assert hit is not None and hit.get("locale") == "de"


def test_none_with_fallback_uses_config_flag(scenario_set) -> None:
    assert make_resolver(use_fallback=True).resolve("de", None, scenario_set) is not None
    assert make_resolver(use_fallback=False).resolve("de", None, scenario_set) is None


def test_none_locale_uses_configured_current_locale(scenario_set) -> None:
    record = make_resolver(locale="fr").resolve(None, False, scenario_set)
    assert record is not None and record.get("title") == "Bonjour"


def test_resolution_is_deterministic_and_does_not_mutate_set(scenario_set) -> None:
    resolver = make_resolver()
    first = resolver.resolve("de-AT", True, scenario_set)
    second = resolver.resolve("de-AT", True, scenario_set)
    assert first is second
    assert len(scenario_set) == 2
    assert resolver.resolve("it", False, scenario_set) is None
    assert len(scenario_set) == 2


def test_fallback_locale_for() -> None:
    resolver = make_resolver()
    assert resolver.fallback_locale_for("de-AT").code == "de"
    assert resolver.fallback_locale_for("fr").code == "en"
    assert resolver.fallback_locale_for(None).code == "en"


class TestResolveField:
    """字段级回退：记录已命中但字段为空时，改用全局回退语言的值。"""

    def test_empty_value_uses_global_fallback_value(self) -> None:
        resolver = make_resolver(use_property_fallback=True)
        translations = make_translation_set(
            {"en": {"title": "Hello", "name": "Greece"}, "fr": {"title": "", "name": "Grèce"}}
        )
        assert resolver.resolve_field("fr", "title", True, translations) == "Hello"
        assert resolver.resolve_field("fr", "name", True, translations) == "Grèce"

    def test_unset_value_counts_as_empty(self) -> None:
        resolver = make_resolver(use_property_fallback=True)
        translations = make_translation_set({"en": {"title": "Hello"}, "fr": {}})
        assert resolver.resolve_field("fr", "title", True, translations) == "Hello"

    def test_property_fallback_requires_both_flags(self) -> None:
        translations = make_translation_set({"en": {"title": "Hello"}, "fr": {"title": ""}})
        assert make_resolver(use_property_fallback=False).resolve_field(
            "fr", "title", True, translations
        ) == ""
        assert make_resolver(use_property_fallback=True).resolve_field(
            "fr", "title", False, translations
        ) == ""

    def test_zero_is_not_empty(self) -> None:
        resolver = make_resolver(use_property_fallback=True)
        translations = make_translation_set({"en": {"rank": 5}, "fr": {"rank": 0}})
        assert resolver.resolve_field("fr", "rank", True, translations) == 0

    def test_missing_record_returns_none(self, scenario_set) -> None:
        resolver = make_resolver()
        assert resolver.resolve_field("it", "title", False, scenario_set) is None
