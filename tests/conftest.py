# tests/conftest.py
"""项目全局共享的测试 Fixtures。"""

from collections.abc import Generator
from typing import Any

import pytest
from pytest_mock import MockerFixture
from rich.console import Console

from tests.helpers.factories import Country, make_config, make_context
from translatable.config import TranslatableConfig
from translatable.context import TranslationContext
from translatable.persistence import InMemoryRepository


@pytest.fixture(scope="session", autouse=True)
def disable_rich_colors_for_tests(
    session_mocker: MockerFixture,
) -> Generator[None, None, None]:
    """全局禁用 rich 库的颜色输出，以确保测试结果的确定性。"""
    original_init = Console.__init__

    def new_init(self: Console, *args: Any, **kwargs: Any) -> None:
        kwargs["force_terminal"] = False
        kwargs["color_system"] = None
        original_init(self, *args, **kwargs)

    session_mocker.patch("rich.console.Console.__init__", new=new_init)
    yield


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """清理所有 TRANSLATABLE_ 环境变量，避免宿主环境影响配置。"""
    import os

    for key in list(os.environ):
        if key.startswith("TRANSLATABLE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def config() -> TranslatableConfig:
    return make_config()


@pytest.fixture
def context(config: TranslatableConfig, repository: InMemoryRepository) -> TranslationContext:
    return make_context(config=config, repository=repository)


@pytest.fixture
def country(context: TranslationContext) -> Country:
    """一个尚未保存、带 en/fr 两条译文的实体。"""
    return Country(
        context,
        {"code": "gr", "en": {"name": "Greece"}, "fr": {"name": "Grèce"}},
    )
