# tests/integration/conftest.py
"""
集成测试 Fixtures：在临时 SQLite 文件上运行 SqlAlchemyRepository。
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy import (
    Column,
    Engine,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    create_engine,
)

from tests.helpers.factories import make_context
from translatable.context import TranslationContext
from translatable.persistence import SqlAlchemyRepository


def build_metadata() -> MetaData:
    metadata = MetaData()
    Table(
        "countries",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("code", String(8), nullable=False, unique=True),
    )
    Table(
        "country_translations",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("country_id", Integer, ForeignKey("countries.id"), nullable=False),
        Column("locale", String(16), nullable=False),
        Column("name", String(255)),
        Column("title", String(255)),
        UniqueConstraint("country_id", "locale", name="uq_country_locale"),
    )
    Table(
        "languages",
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("code", String(16), nullable=False, unique=True),
    )
    return metadata


@pytest.fixture
def engine(tmp_path: Path) -> Generator[Engine, None, None]:
    engine = create_engine(f"sqlite:///{tmp_path / 'translatable.db'}")
    build_metadata().create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_repository(engine: Engine) -> SqlAlchemyRepository:
    """不传 MetaData：表结构在首次使用时从数据库反射。"""
    return SqlAlchemyRepository(engine)


@pytest.fixture
def sql_context(sql_repository: SqlAlchemyRepository) -> TranslationContext:
    return make_context(repository=sql_repository)
