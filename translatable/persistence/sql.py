# translatable/persistence/sql.py
"""
基于 SQLAlchemy Core 的同步存储实现。

表结构由调用方提供（预先声明在 MetaData 中），缺失的表会在首次使用时
从数据库反射加载。本模块不做任何迁移或建表工作。
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog
from sqlalchemy import Engine, MetaData, Table, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, NoSuchTableError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from translatable.core.exceptions import DatabaseError
from translatable.records import Record

logger = structlog.get_logger(__name__)


class SqlAlchemyRepository:
    """实现 `Repository` 协议。完整性约束冲突以 False 报告，其余驱动错误包装为 DatabaseError。"""

    def __init__(self, engine: Engine, metadata: MetaData | None = None):
        self._engine = engine
        self._metadata = metadata if metadata is not None else MetaData()
        self._sessionmaker: sessionmaker[Session] = sessionmaker(bind=engine)

    @property
    def metadata(self) -> MetaData:
        return self._metadata

    def table(self, name: str) -> Table:
        table = self._metadata.tables.get(name)
        if table is not None:
            return table
        try:
            return Table(name, self._metadata, autoload_with=self._engine)
        except NoSuchTableError as e:
            raise DatabaseError(f"数据表 '{name}' 不存在。") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"反射数据表 '{name}' 失败: {e}") from e

    @staticmethod
    def _primary_key_name(table: Table) -> str:
        columns = list(table.primary_key.columns)
        return columns[0].name if columns else "id"

    def find_where(self, table: str, column: str, value: Any) -> Record | None:
        t = self.table(table)
        try:
            with self._sessionmaker() as session:
                stmt = select(t).where(t.c[column] == value).limit(1)
                row = session.execute(stmt).mappings().first()
        except SQLAlchemyError as e:
            raise DatabaseError(f"按 {table}.{column} 查询失败: {e}") from e
        if row is None:
            return None
        return Record.from_row(table, dict(row), primary_key=self._primary_key_name(t))

    def save(self, record: Record) -> bool:
        t = self.table(record.table)
        columns = set(t.c.keys())
        key = record.key
        try:
            with self._sessionmaker.begin() as session:
                if not record.exists:
                    values = {k: v for k, v in record.to_dict().items() if k in columns}
                    result = session.execute(insert(t).values(values))
                    if key is None and result.inserted_primary_key:
                        key = result.inserted_primary_key[0]
                else:
                    dirty = {k: v for k, v in record.get_dirty().items() if k in columns}
                    if dirty:
                        stmt = (
                            update(t)
                            .where(t.c[record.primary_key] == record.key)
                            .values(dirty)
                        )
                        if session.execute(stmt).rowcount == 0:
                            logger.warning(
                                "更新未命中任何行。", table=record.table, key=record.key
                            )
                            return False
        except IntegrityError as e:
            logger.warning("保存记录违反完整性约束。", table=record.table, error=str(e.orig))
            return False
        except SQLAlchemyError as e:
            raise DatabaseError(f"保存 {record.table} 记录失败: {e}") from e

        record.mark_persisted(key)
        return True

    def query_related(
        self, parent_key: Any, child_table: str, foreign_key: str
    ) -> Sequence[Record]:
        t = self.table(child_table)
        primary_key = self._primary_key_name(t)
        try:
            with self._sessionmaker() as session:
                stmt = (
                    select(t)
                    .where(t.c[foreign_key] == parent_key)
                    .order_by(t.c[primary_key])
                )
                rows = session.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            raise DatabaseError(f"查询 {child_table} 关联记录失败: {e}") from e
        return [Record.from_row(child_table, dict(row), primary_key=primary_key) for row in rows]

    def delete(self, record: Record) -> bool:
        t = self.table(record.table)
        try:
            with self._sessionmaker.begin() as session:
                stmt = delete(t).where(t.c[record.primary_key] == record.key)
                deleted = session.execute(stmt).rowcount
        except SQLAlchemyError as e:
            raise DatabaseError(f"删除 {record.table} 记录失败: {e}") from e
        if deleted:
            record.exists = False
        return bool(deleted)
