"""WorkflowEventStore Port - 工作流事件日志的存储接口

KISS：接口刻意保持窄（append / 按订单过滤 / 按类型取最新），
以便用数据库或日志文件替换内存实现时只需机械地实现这几个方法。

约束：
- append 同步、进程内完成，不做去重，不设容量上限
- 所有查询都按插入顺序（即时间顺序）返回
"""

from __future__ import annotations

from typing import Protocol

from printflow.domain.entities.workflow_event import WorkflowEvent
from printflow.domain.value_objects.workflow_event_type import WorkflowEventType


class WorkflowEventStore(Protocol):
    def append(self, event: WorkflowEvent) -> None: ...

    def all_events(self) -> list[WorkflowEvent]: ...

    def events_for_order(self, order_id: str) -> list[WorkflowEvent]: ...

    def latest_of_type(
        self, order_id: str, event_type: WorkflowEventType
    ) -> WorkflowEvent | None: ...
