"""PaymentStatus 枚举 - 收款记录状态（会计模块）"""

from enum import Enum


class PaymentStatus(str, Enum):
    NOT_STARTED = "not_started"
    PENDING = "pending"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()
