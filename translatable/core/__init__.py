# translatable/core/__init__.py
"""
本核心包定义了 translatable 中最基础、最稳定的构建块。

这里包含了核心数据类型、接口协议和自定义异常，它们共同构成了
整个库的“契约”。本包不依赖于项目中的任何其他模块。
"""

from .exceptions import (
    ConfigurationError,
    DatabaseError,
    LocalesNotConfiguredError,
    TranslatableError,
)
from .interfaces import Repository
from .types import Attributes, Language, LocaleKey, LocaleLike

__all__ = [
    # from exceptions.py
    "TranslatableError",
    "ConfigurationError",
    "LocalesNotConfiguredError",
    "DatabaseError",
    # from interfaces.py
    "Repository",
    # from types.py
    "Attributes",
    "Language",
    "LocaleKey",
    "LocaleLike",
]
