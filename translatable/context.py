# translatable/context.py
"""定义实体在解析与保存时使用的高层上下文对象。"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from translatable.events import EventDispatcher
from translatable.languages import LanguageDirectory
from translatable.locales import LocaleCatalog
from translatable.resolver import TranslationResolver

if TYPE_CHECKING:
    from translatable.config import TranslatableConfig
    from translatable.core.interfaces import Repository
    from translatable.core.types import Language


@dataclass(frozen=True)
class TranslationContext:
    """一个“工具箱”对象，封装了实体执行解析与保存时所需的所有依赖项。"""

    # 核心依赖组件
    config: "TranslatableConfig"
    repository: "Repository"
    catalog: LocaleCatalog
    languages: LanguageDirectory
    resolver: TranslationResolver

    # 可选依赖组件
    events: EventDispatcher = field(default_factory=EventDispatcher)

    @classmethod
    def create(
        cls,
        config: "TranslatableConfig",
        repository: "Repository",
        *,
        events: Optional[EventDispatcher] = None,
        languages: Optional[Iterable["Language"]] = None,
    ) -> TranslationContext:
        """按配置组装全部组件。locales 为空时在这里立即失败。"""
        catalog = LocaleCatalog(config)
        return cls(
            config=config,
            repository=repository,
            catalog=catalog,
            languages=LanguageDirectory(config, repository, preloaded=languages),
            resolver=TranslationResolver(config, catalog),
            events=events or EventDispatcher(),
        )
