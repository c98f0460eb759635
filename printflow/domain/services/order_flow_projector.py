"""订单流程投影 (OrderFlowProjector)

业务定义：
- 根据订单当前状态、客户类型、是否已收定金，推导出有序的流程步骤列表
- 每个步骤标记 completed / active，供进度条渲染
- 只读投影：无副作用、无 I/O

步骤主干：
    pending(接单) → design → [deposited，仅零售客户] → proofing → production → completed → invoice

关键规则：
1. 企业客户不收定金，因此同一套 OrderStatus 会投影出不同长度的步骤列表
2. completed 与 active 相互独立计算：
   - completed：当前状态“已到达或越过”该步骤的下游状态之一（按 OrderStatus.rank）
   - active：当前状态恰好属于该步骤自己的状态集合
3. deposited 步骤的 completed 只取决于 has_deposit（定金状态不在状态枚举中跟踪）
4. 不强制 active 互斥：输入不一致时（如已收定金但状态仍是 waiting_for_deposit）
   某个步骤可能同时 completed 且 active，这是有意保留的行为
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from printflow.domain.value_objects.customer_kind import CustomerKind
from printflow.domain.value_objects.order_status import OrderStatus


@dataclass(frozen=True, slots=True)
class FlowStep:
    id: str
    label: str
    completed: bool
    active: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "label": self.label,
            "completed": self.completed,
            "active": self.active,
        }


@dataclass(frozen=True, slots=True)
class _StepDefinition:
    id: str
    label: str
    done_at: tuple[OrderStatus, ...]
    active_in: tuple[OrderStatus, ...]


_BEFORE_DEPOSIT = (
    _StepDefinition(
        id="pending",
        label="Receive order",
        done_at=(OrderStatus.DESIGNING,),
        active_in=(OrderStatus.PENDING,),
    ),
    _StepDefinition(
        id="design",
        label="Design",
        done_at=(OrderStatus.CONFIRMED_FOR_PRINTING,),
        active_in=(
            OrderStatus.DESIGNING,
            OrderStatus.WAITING_FOR_CUSTOMER_APPROVAL,
            OrderStatus.EDITING,
        ),
    ),
)

_DEPOSIT_ACTIVE_IN = (OrderStatus.WAITING_FOR_DEPOSIT,)

_AFTER_DEPOSIT = (
    _StepDefinition(
        id="proofing",
        label="Proofing",
        done_at=(OrderStatus.PROOFED,),
        active_in=(OrderStatus.WAITING_FOR_PROOFING,),
    ),
    _StepDefinition(
        id="production",
        label="Production",
        done_at=(OrderStatus.PRODUCTION_COMPLETED,),
        active_in=(
            OrderStatus.PROOFED,
            OrderStatus.WAITING_FOR_PRODUCTION,
            OrderStatus.IN_PRODUCTION,
        ),
    ),
    _StepDefinition(
        id="completed",
        label="Completed",
        done_at=(OrderStatus.COMPLETED,),
        active_in=(OrderStatus.PRODUCTION_COMPLETED, OrderStatus.DELIVERING),
    ),
    # 开票可以多次，最后一步在 invoice_issued 时既完成又激活
    _StepDefinition(
        id="invoice",
        label="Invoice",
        done_at=(OrderStatus.INVOICE_ISSUED,),
        active_in=(OrderStatus.COMPLETED, OrderStatus.INVOICE_ISSUED),
    ),
)


def _parse_status(current_status: OrderStatus | str | None) -> OrderStatus | None:
    """None 和空字符串视为 pending；目录外的状态返回 None（不会命中任何步骤）"""
    if not current_status:
        return OrderStatus.PENDING
    try:
        return OrderStatus.from_value(current_status)
    except ValueError:
        return None


def _is_at_or_past(status: OrderStatus | None, targets: Sequence[OrderStatus]) -> bool:
    if status is None or status.rank is None:
        return False
    return any(status.rank >= target.rank for target in targets)


def _is_exactly(status: OrderStatus | None, candidates: Sequence[OrderStatus]) -> bool:
    if status is None:
        return False
    return status.canonical in candidates


class OrderFlowProjector:
    """订单进度投影器

    使用示例：
        steps = OrderFlowProjector().project("waiting_for_proofing", "retail", has_deposit=True)
    """

    def project(
        self,
        current_status: OrderStatus | str | None,
        customer_kind: CustomerKind | str,
        has_deposit: bool,
    ) -> list[FlowStep]:
        status = _parse_status(current_status)
        kind = CustomerKind(customer_kind)

        steps = [self._build(definition, status) for definition in _BEFORE_DEPOSIT]

        if kind == CustomerKind.RETAIL:
            steps.append(
                FlowStep(
                    id="deposited",
                    label="Deposit",
                    completed=has_deposit,
                    active=_is_exactly(status, _DEPOSIT_ACTIVE_IN),
                )
            )

        steps.extend(self._build(definition, status) for definition in _AFTER_DEPOSIT)
        return steps

    @staticmethod
    def _build(definition: _StepDefinition, status: OrderStatus | None) -> FlowStep:
        return FlowStep(
            id=definition.id,
            label=definition.label,
            completed=_is_at_or_past(status, definition.done_at),
            active=_is_exactly(status, definition.active_in),
        )

    @staticmethod
    def is_cancelled(current_status: OrderStatus | str | None) -> bool:
        """已取消的订单不展示进度（前端直接显示取消提示）"""
        return _parse_status(current_status) == OrderStatus.CANCELLED

    @staticmethod
    def progress_ratio(steps: Sequence[FlowStep]) -> float:
        """已完成步骤占比，用于进度条宽度"""
        if not steps:
            return 0.0
        return sum(1 for step in steps if step.completed) / len(steps)


__all__ = ["FlowStep", "OrderFlowProjector"]
