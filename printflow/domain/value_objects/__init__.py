"""Domain 值对象

导出所有领域值对象，方便其他模块导入
"""

from printflow.domain.value_objects.customer_kind import CustomerKind
from printflow.domain.value_objects.design_status import DesignStatus
from printflow.domain.value_objects.order_status import OrderStatus
from printflow.domain.value_objects.payment_status import PaymentStatus
from printflow.domain.value_objects.production_status import ProductionStatus
from printflow.domain.value_objects.workflow_event_type import WorkflowEventType, WorkflowModule

__all__ = [
    "CustomerKind",
    "DesignStatus",
    "OrderStatus",
    "PaymentStatus",
    "ProductionStatus",
    "WorkflowEventType",
    "WorkflowModule",
]
