"""DesignStatus 枚举 - 设计稿生命周期状态

业务定义：
- Design 是订单中单个印刷品的设计工作项，独立于所属订单跟踪状态
- 每个 Design 任何时刻都恰好处于下列状态之一

状态转换（由 DesignTransitionGuard 固化）：
received_info → designing → waiting_for_customer_approval → editing / confirmed_for_printing
editing → waiting_for_customer_approval
confirmed_for_printing 为终态
"""

from __future__ import annotations

from enum import Enum


class DesignStatus(str, Enum):
    """设计状态枚举

    继承 str：序列化/数据库存储友好，可以直接和字符串比较。
    """

    RECEIVED_INFO = "received_info"
    DESIGNING = "designing"
    EDITING = "editing"
    WAITING_FOR_CUSTOMER_APPROVAL = "waiting_for_customer_approval"
    CONFIRMED_FOR_PRINTING = "confirmed_for_printing"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def from_value(cls, value: str | DesignStatus) -> DesignStatus:
        """从原始字符串解析，未知值抛出 ValueError"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown design status: {value!r}") from None


_LABELS: dict[DesignStatus, str] = {
    DesignStatus.RECEIVED_INFO: "Information received",
    DesignStatus.DESIGNING: "Designing",
    DesignStatus.EDITING: "Editing",
    DesignStatus.WAITING_FOR_CUSTOMER_APPROVAL: "Waiting for customer approval",
    DesignStatus.CONFIRMED_FOR_PRINTING: "Confirmed for printing",
}

_DESCRIPTIONS: dict[DesignStatus, str] = {
    DesignStatus.RECEIVED_INFO: "The brief and artwork inputs have been received from the customer.",
    DesignStatus.DESIGNING: "A designer is preparing the first draft.",
    DesignStatus.EDITING: "The customer requested changes and the draft is being revised.",
    DesignStatus.WAITING_FOR_CUSTOMER_APPROVAL: "A draft has been sent and the customer has to approve or request changes.",
    DesignStatus.CONFIRMED_FOR_PRINTING: "The customer approved the design; it is locked for printing.",
}
