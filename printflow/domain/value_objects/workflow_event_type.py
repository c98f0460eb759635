"""工作流事件类型与模块

业务定义：
- WorkflowEventType: 跨模块事件的类型，每种类型对应一个“状态所有者”模块
- WorkflowModule: 参与联动的业务模块（订单、设计、生产、会计）
"""

from __future__ import annotations

from enum import Enum


class WorkflowModule(str, Enum):
    ORDERS = "orders"
    DESIGN = "design"
    PRODUCTION = "production"
    ACCOUNTING = "accounting"


class WorkflowEventType(str, Enum):
    ORDER_STATUS_CHANGE = "order_status_change"
    DESIGN_STATUS_CHANGE = "design_status_change"
    PRODUCTION_STATUS_CHANGE = "production_status_change"
    PAYMENT_STATUS_CHANGE = "payment_status_change"

    @property
    def module(self) -> WorkflowModule:
        """事件类型所属的模块"""
        return _EVENT_MODULES[self]

    @classmethod
    def for_module(cls, module: WorkflowModule) -> WorkflowEventType:
        for event_type, owner in _EVENT_MODULES.items():
            if owner == module:
                return event_type
        raise ValueError(f"No event type for module: {module!r}")


_EVENT_MODULES: dict[WorkflowEventType, WorkflowModule] = {
    WorkflowEventType.ORDER_STATUS_CHANGE: WorkflowModule.ORDERS,
    WorkflowEventType.DESIGN_STATUS_CHANGE: WorkflowModule.DESIGN,
    WorkflowEventType.PRODUCTION_STATUS_CHANGE: WorkflowModule.PRODUCTION,
    WorkflowEventType.PAYMENT_STATUS_CHANGE: WorkflowModule.ACCOUNTING,
}
