# translatable/events.py
"""
定义了父实体保存生命周期中的事件模型，以及一个简单的进程内事件分发器。
"""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

logger = structlog.get_logger(__name__)


class ModelEvent(BaseModel):
    """生命周期事件的基类。"""

    model_config = ConfigDict(frozen=True)

    event_type: str
    table: str
    key: Any = None
    payload: dict[str, Any] | None = None


class ModelCreated(ModelEvent):
    """父实体首次插入成功后触发。"""

    event_type: str = "model.created"


class ModelUpdated(ModelEvent):
    """父实体（或仅其译文）被更新后触发。"""

    event_type: str = "model.updated"


class ModelSaved(ModelEvent):
    """任意一次成功保存之后触发。"""

    event_type: str = "model.saved"


Listener = Callable[[ModelEvent], None]


class EventDispatcher:
    """按 event_type 注册监听器并同步分发事件。"""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def listen(self, event_type: str, listener: Listener) -> None:
        self._listeners[event_type].append(listener)

    def forget(self, event_type: str) -> None:
        self._listeners.pop(event_type, None)

    def dispatch(self, event: ModelEvent) -> None:
        listeners = self._listeners.get(event.event_type, [])
        logger.debug(
            "分发生命周期事件",
            event_type=event.event_type,
            table=event.table,
            key=event.key,
            listeners=len(listeners),
        )
        for listener in listeners:
            listener(event)
