"""OrderStatus 枚举 - 订单状态

业务定义：
- 订单状态比设计状态宽松：没有权威的流转表约束订单状态变化
- 除主干状态外，还包含前端和旧接口仍在使用的扩展/遗留状态

设计原则：
- 继承 str 方便序列化
- 通过 rank 暴露“生命周期进度位置”，供 OrderFlowProjector 判断“是否已到达或越过”
- 遗留状态（new / waiting_approval / confirmed）通过 canonical 映射到主干状态
- cancelled 不在进度轴上（rank 为 None）
"""

from __future__ import annotations

from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    DESIGNING = "designing"
    WAITING_FOR_CUSTOMER_APPROVAL = "waiting_for_customer_approval"
    EDITING = "editing"
    CONFIRMED_FOR_PRINTING = "confirmed_for_printing"
    WAITING_FOR_DEPOSIT = "waiting_for_deposit"
    DEPOSIT_RECEIVED = "deposit_received"
    DEBT_APPROVED = "debt_approved"
    WAITING_FOR_PROOFING = "waiting_for_proofing"
    PROOFED = "proofed"
    WAITING_FOR_PRODUCTION = "waiting_for_production"
    IN_PRODUCTION = "in_production"
    PRODUCTION_COMPLETED = "production_completed"
    DELIVERING = "delivering"
    COMPLETED = "completed"
    INVOICE_ISSUED = "invoice_issued"
    CANCELLED = "cancelled"

    # 遗留状态
    NEW = "new"
    WAITING_APPROVAL = "waiting_approval"
    CONFIRMED = "confirmed"

    @property
    def canonical(self) -> OrderStatus:
        """遗留状态映射到主干状态，其余状态返回自身"""
        return _LEGACY_ALIASES.get(self, self)

    @property
    def rank(self) -> int | None:
        """生命周期进度位置（越大越靠后）；遗留状态取主干状态的位置，cancelled 返回 None"""
        return _PROGRESS_RANK.get(self.canonical)

    @property
    def is_legacy(self) -> bool:
        return self in _LEGACY_ALIASES

    @property
    def label(self) -> str:
        return _LABELS[self.canonical]

    @classmethod
    def from_value(cls, value: str | OrderStatus) -> OrderStatus:
        """从原始字符串解析，未知值抛出 ValueError"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown order status: {value!r}") from None

    @classmethod
    def progress_order(cls) -> tuple[OrderStatus, ...]:
        return _PROGRESS


# 进度轴：送货在完成之前，开票在完成之后
_PROGRESS: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.DESIGNING,
    OrderStatus.WAITING_FOR_CUSTOMER_APPROVAL,
    OrderStatus.EDITING,
    OrderStatus.CONFIRMED_FOR_PRINTING,
    OrderStatus.WAITING_FOR_DEPOSIT,
    OrderStatus.DEPOSIT_RECEIVED,
    OrderStatus.DEBT_APPROVED,
    OrderStatus.WAITING_FOR_PROOFING,
    OrderStatus.PROOFED,
    OrderStatus.WAITING_FOR_PRODUCTION,
    OrderStatus.IN_PRODUCTION,
    OrderStatus.PRODUCTION_COMPLETED,
    OrderStatus.DELIVERING,
    OrderStatus.COMPLETED,
    OrderStatus.INVOICE_ISSUED,
)

_PROGRESS_RANK: dict[OrderStatus, int] = {status: index for index, status in enumerate(_PROGRESS)}

_LEGACY_ALIASES: dict[OrderStatus, OrderStatus] = {
    OrderStatus.NEW: OrderStatus.PENDING,
    OrderStatus.WAITING_APPROVAL: OrderStatus.WAITING_FOR_CUSTOMER_APPROVAL,
    OrderStatus.CONFIRMED: OrderStatus.CONFIRMED_FOR_PRINTING,
}

_LABELS: dict[OrderStatus, str] = {
    OrderStatus.PENDING: "Pending",
    OrderStatus.DESIGNING: "Designing",
    OrderStatus.WAITING_FOR_CUSTOMER_APPROVAL: "Waiting for customer approval",
    OrderStatus.EDITING: "Editing",
    OrderStatus.CONFIRMED_FOR_PRINTING: "Confirmed for printing",
    OrderStatus.WAITING_FOR_DEPOSIT: "Waiting for deposit",
    OrderStatus.DEPOSIT_RECEIVED: "Deposit received",
    OrderStatus.DEBT_APPROVED: "Debt approved",
    OrderStatus.WAITING_FOR_PROOFING: "Waiting for proofing",
    OrderStatus.PROOFED: "Proofed",
    OrderStatus.WAITING_FOR_PRODUCTION: "Waiting for production",
    OrderStatus.IN_PRODUCTION: "In production",
    OrderStatus.PRODUCTION_COMPLETED: "Production completed",
    OrderStatus.DELIVERING: "Delivering",
    OrderStatus.COMPLETED: "Completed",
    OrderStatus.INVOICE_ISSUED: "Invoice issued",
    OrderStatus.CANCELLED: "Cancelled",
}
