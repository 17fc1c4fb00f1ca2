# tests/integration/test_sql_repository.py
"""
对 SqlAlchemyRepository 与 TranslatableModel 的端到端流程进行集成测试。
"""

from __future__ import annotations

import pytest
from sqlalchemy import Engine, select

from tests.helpers.factories import Country
from translatable.context import TranslationContext
from translatable.core.exceptions import DatabaseError
from translatable.persistence import SqlAlchemyRepository
from translatable.records import Record, TranslationRecord

pytestmark = [pytest.mark.db, pytest.mark.integration]


def test_insert_find_update_delete(sql_repository: SqlAlchemyRepository) -> None:
    record = Record("countries", {"code": "gr"})
    assert sql_repository.save(record) is True
    assert record.exists is True
    assert record.key == 1
    assert record.is_dirty() is False

    found = sql_repository.find_where("countries", "code", "gr")
    assert found is not None
    assert found.to_dict() == {"id": 1, "code": "gr"}

    found.set("code", "el")
    assert sql_repository.save(found) is True
    assert sql_repository.find_where("countries", "id", 1).get("code") == "el"

    assert sql_repository.delete(found) is True
    assert found.exists is False
    assert sql_repository.find_where("countries", "id", 1) is None


def test_integrity_violation_is_reported_as_false(
    sql_repository: SqlAlchemyRepository,
) -> None:
    assert sql_repository.save(Record("countries", {"code": "gr"})) is True
    duplicate = Record("countries", {"code": "gr"})
    assert sql_repository.save(duplicate) is False
    assert duplicate.exists is False


def test_unknown_table_raises_database_error(sql_repository: SqlAlchemyRepository) -> None:
    with pytest.raises(DatabaseError):
        sql_repository.find_where("nope", "id", 1)


def test_unknown_columns_are_ignored_on_write(sql_repository: SqlAlchemyRepository) -> None:
    record = Record("countries", {"code": "gr", "not_a_column": 1})
    assert sql_repository.save(record) is True
    assert sql_repository.find_where("countries", "id", record.key).to_dict() == {
        "id": record.key,
        "code": "gr",
    }


def test_model_round_trip(sql_context: TranslationContext, engine: Engine) -> None:
    country = Country(
        sql_context,
        {
            "code": "gr",
            "en": {"name": "Greece"},
            "fr": {"name": "Grèce"},
            "name:de": "Griechenland",
        },
    )
    assert country.save() is True

    loaded = Country.find(sql_context, country.key)
    assert loaded is not None
    assert loaded.get_translations_dict() == {
        "en": {"name": "Greece", "title": None},
        "fr": {"name": "Grèce", "title": None},
        "de": {"name": "Griechenland", "title": None},
    }

    loaded["name:fr"] = "La Grèce"
    assert loaded.save() is True
    assert Country.find(sql_context, country.key).get("name:fr") == "La Grèce"

    assert loaded.delete_translations(["de"]) == 1
    repository = sql_context.repository
    assert isinstance(repository, SqlAlchemyRepository)
    t = repository.table("country_translations")
    with engine.connect() as conn:
        locales = conn.execute(select(t.c.locale).order_by(t.c.id)).scalars().all()
    assert locales == ["en", "fr"]


def test_duplicate_locale_stops_translation_save(
    sql_context: TranslationContext,
) -> None:
    """数据层的唯一约束拒绝重复语言时，保存报告失败，但父记录与先前的译文已提交。"""
    country = Country(sql_context, {"code": "gr", "en": {"name": "Greece"}})
    country.translations.add(
        TranslationRecord(country.translations_table(), {"locale": "en", "name": "Dup"})
    )

    assert country.save() is False
    assert country.exists is True

    reloaded = Country.find(sql_context, country.key)
    assert reloaded is not None
    assert len(reloaded.translations) == 1
    assert reloaded.get("name:en") == "Greece"


def test_language_directory_reads_languages_table(
    sql_context: TranslationContext, sql_repository: SqlAlchemyRepository
) -> None:
    assert sql_repository.save(Record("languages", {"code": "en"})) is True
    language = sql_context.languages.lookup_by_code("en")
    assert language is not None
    assert language.id == 1
    assert sql_context.languages.lookup_by_code("fr") is None
