"""工作流状态视图 (WorkflowStatusView)

从事件日志派生订单的跨模块状态摘要 {order, design, production, payment}：
- 每个字段取该订单对应类型的最后一条事件的 new_status
- 没有事件时取模块的“未开始”哨兵值（order 为 pending，其余为 not_started）
- 每次读取都重新派生，不缓存；正确性完全依赖事件被完整记录
- 不校验一致性（payment=completed 而 order=pending 也照常返回）
"""

from __future__ import annotations

from dataclasses import dataclass

from printflow.domain.ports.workflow_event_store import WorkflowEventStore
from printflow.domain.value_objects.status_catalog import NOT_STARTED_SENTINELS
from printflow.domain.value_objects.workflow_event_type import WorkflowEventType, WorkflowModule


@dataclass(frozen=True, slots=True)
class WorkflowStatusSnapshot:
    order: str
    design: str
    production: str
    payment: str

    def to_dict(self) -> dict[str, str]:
        return {
            "order": self.order,
            "design": self.design,
            "production": self.production,
            "payment": self.payment,
        }

    def for_module(self, module: WorkflowModule) -> str:
        return {
            WorkflowModule.ORDERS: self.order,
            WorkflowModule.DESIGN: self.design,
            WorkflowModule.PRODUCTION: self.production,
            WorkflowModule.ACCOUNTING: self.payment,
        }[module]


class WorkflowStatusView:
    def __init__(self, store: WorkflowEventStore):
        self._store = store

    def status_of(self, order_id: str) -> WorkflowStatusSnapshot:
        return WorkflowStatusSnapshot(
            order=self.current_status(order_id, WorkflowEventType.ORDER_STATUS_CHANGE),
            design=self.current_status(order_id, WorkflowEventType.DESIGN_STATUS_CHANGE),
            production=self.current_status(order_id, WorkflowEventType.PRODUCTION_STATUS_CHANGE),
            payment=self.current_status(order_id, WorkflowEventType.PAYMENT_STATUS_CHANGE),
        )

    def current_status(self, order_id: str, event_type: WorkflowEventType) -> str:
        """单个模块的当前状态（最近一条事件的 new_status 或哨兵值）"""
        latest = self._store.latest_of_type(order_id, event_type)
        if latest is None:
            return NOT_STARTED_SENTINELS[event_type.module]
        return latest.new_status


__all__ = ["WorkflowStatusSnapshot", "WorkflowStatusView"]
