"""WorkflowEvent 实体 - 跨模块状态变更事件

业务定义：
- 任何模块完成一次状态变更后都会产生一条 WorkflowEvent
- 事件一经记录不可变（frozen），事件日志是纯历史
- order_id 只是弱引用：日志不拥有订单/设计/生产实体，只记录 id 和状态字符串
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from printflow.domain.value_objects.workflow_event_type import WorkflowEventType

# 持久化列宽（API 请求校验使用同一组上限）
ORDER_ID_MAX_LENGTH = 64
STATUS_MAX_LENGTH = 64
TRIGGERED_BY_MAX_LENGTH = 255


@dataclass(frozen=True, slots=True)
class WorkflowEvent:
    """WorkflowEvent 领域实体"""

    type: WorkflowEventType
    order_id: str
    old_status: str
    new_status: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    triggered_by: str | None = None

    @classmethod
    def create(
        cls,
        *,
        type: WorkflowEventType | str,
        order_id: str,
        old_status: str,
        new_status: str,
        triggered_by: str | None = None,
    ) -> WorkflowEvent:
        return cls(
            type=WorkflowEventType(type),
            order_id=order_id,
            old_status=old_status,
            new_status=new_status,
            timestamp=datetime.now(UTC),
            triggered_by=triggered_by,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "order_id": self.order_id,
            "old_status": self.old_status,
            "new_status": self.new_status,
            "timestamp": self.timestamp.isoformat(),
            "triggered_by": self.triggered_by,
        }
