# translatable/__init__.py
"""translatable: 面向记录型存储的多语言内容层。

给定一个父实体及其各语言的译文记录，按可配置的回退规则解析应当呈现的译文，
并把父实体与脏译文作为一个逻辑单元保存。
"""

__version__ = "1.0.0"

from .config import TranslatableConfig
from .context import TranslationContext
from .core.exceptions import (
    ConfigurationError,
    DatabaseError,
    LocalesNotConfiguredError,
    TranslatableError,
)
from .core.types import Language, LocaleKey
from .languages import LanguageDirectory
from .locales import LocaleCatalog
from .model import TranslatableModel
from .persistence import InMemoryRepository, PersistenceCoordinator, SqlAlchemyRepository
from .records import Record, TranslationRecord
from .resolver import TranslationResolver
from .router import AttributeRouter
from .translation_set import TranslationSet

__all__ = [
    "__version__",
    "TranslatableConfig",
    "TranslationContext",
    "TranslatableModel",
    "LocaleCatalog",
    "LanguageDirectory",
    "TranslationSet",
    "TranslationResolver",
    "AttributeRouter",
    "PersistenceCoordinator",
    "InMemoryRepository",
    "SqlAlchemyRepository",
    "Record",
    "TranslationRecord",
    "Language",
    "LocaleKey",
    "TranslatableError",
    "ConfigurationError",
    "LocalesNotConfiguredError",
    "DatabaseError",
]
