# translatable/persistence/__init__.py
"""
存储层相关实现：保存协调器、内存存储、SQLAlchemy 存储与查询构建器。
"""

from .coordinator import PersistenceCoordinator
from .memory import InMemoryRepository
from .queries import TranslationQueries
from .sql import SqlAlchemyRepository

__all__ = [
    "PersistenceCoordinator",
    "InMemoryRepository",
    "SqlAlchemyRepository",
    "TranslationQueries",
]
