"""默认联动规则集

| 规则 | 方向 | 条件 | 效果 |
|------|------|------|------|
| order_confirmed_creates_production | orders → production | 订单状态变为 confirmed | 创建生产任务，生产状态 pending |
| production_completed_updates_order | production → orders | 生产状态变为 completed | 订单状态 → production_completed |
| order_completed_creates_payment | orders → accounting | 订单状态变为 completed | 创建收款记录，收款状态 pending |
| design_approved_confirms_order | design → orders | 设计状态变为 approved | 订单状态 → confirmed |

注意：设计 approved → 订单 confirmed → 生产 pending 是三跳级联，
每一跳都是一次新的 process_event 调用。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from printflow.domain.entities.workflow_event import WorkflowEvent
from printflow.domain.entities.workflow_rule import RuleCondition, WorkflowRule
from printflow.domain.value_objects.order_status import OrderStatus
from printflow.domain.value_objects.payment_status import PaymentStatus
from printflow.domain.value_objects.production_status import ProductionStatus
from printflow.domain.value_objects.workflow_event_type import WorkflowEventType, WorkflowModule

if TYPE_CHECKING:
    from printflow.domain.services.workflow_rule_engine import WorkflowRuleEngine

DESIGN_APPROVED = "approved"


def status_becomes(event_type: WorkflowEventType, new_status: str) -> RuleCondition:
    """条件工厂：指定类型的事件且 new_status 等于目标值"""

    def condition(event: WorkflowEvent) -> bool:
        return event.type == event_type and event.new_status == new_status

    return condition


def _triggered_by(rule_name: str) -> str:
    return f"workflow:{rule_name}"


def build_default_rules(engine: WorkflowRuleEngine) -> list[WorkflowRule]:
    """构造默认规则（按注册顺序返回）

    动作先调用网关让下游模块落地，再合成下游事件递归进入引擎；
    网关失败时不会合成事件。
    """
    gateway = engine.gateway

    async def create_production(event: WorkflowEvent) -> None:
        await gateway.create_production_task(event.order_id)
        await engine.emit_status_change(
            WorkflowEventType.PRODUCTION_STATUS_CHANGE,
            event.order_id,
            ProductionStatus.PENDING.value,
            triggered_by=_triggered_by("order_confirmed_creates_production"),
        )

    async def mark_order_production_completed(event: WorkflowEvent) -> None:
        new_status = OrderStatus.PRODUCTION_COMPLETED.value
        await gateway.update_order_status(event.order_id, new_status)
        await engine.emit_status_change(
            WorkflowEventType.ORDER_STATUS_CHANGE,
            event.order_id,
            new_status,
            triggered_by=_triggered_by("production_completed_updates_order"),
        )

    async def create_payment(event: WorkflowEvent) -> None:
        await gateway.create_payment_record(event.order_id)
        await engine.emit_status_change(
            WorkflowEventType.PAYMENT_STATUS_CHANGE,
            event.order_id,
            PaymentStatus.PENDING.value,
            triggered_by=_triggered_by("order_completed_creates_payment"),
        )

    async def confirm_order(event: WorkflowEvent) -> None:
        new_status = OrderStatus.CONFIRMED.value
        await gateway.update_order_status(event.order_id, new_status)
        await engine.emit_status_change(
            WorkflowEventType.ORDER_STATUS_CHANGE,
            event.order_id,
            new_status,
            triggered_by=_triggered_by("design_approved_confirms_order"),
        )

    return [
        WorkflowRule(
            name="order_confirmed_creates_production",
            from_module=WorkflowModule.ORDERS,
            to_module=WorkflowModule.PRODUCTION,
            condition=status_becomes(
                WorkflowEventType.ORDER_STATUS_CHANGE, OrderStatus.CONFIRMED.value
            ),
            action=create_production,
        ),
        WorkflowRule(
            name="production_completed_updates_order",
            from_module=WorkflowModule.PRODUCTION,
            to_module=WorkflowModule.ORDERS,
            condition=status_becomes(
                WorkflowEventType.PRODUCTION_STATUS_CHANGE, ProductionStatus.COMPLETED.value
            ),
            action=mark_order_production_completed,
        ),
        WorkflowRule(
            name="order_completed_creates_payment",
            from_module=WorkflowModule.ORDERS,
            to_module=WorkflowModule.ACCOUNTING,
            condition=status_becomes(
                WorkflowEventType.ORDER_STATUS_CHANGE, OrderStatus.COMPLETED.value
            ),
            action=create_payment,
        ),
        WorkflowRule(
            name="design_approved_confirms_order",
            from_module=WorkflowModule.DESIGN,
            to_module=WorkflowModule.ORDERS,
            condition=status_becomes(WorkflowEventType.DESIGN_STATUS_CHANGE, DESIGN_APPROVED),
            action=confirm_order,
        ),
    ]


__all__ = ["DESIGN_APPROVED", "build_default_rules", "status_becomes"]
