"""StatusCatalog - 各业务模块的状态词表

业务定义：
- 每个被跟踪的实体（设计、订单、生产、收款）都有一组有限的命名状态
- 目录提供状态值、可读标签以及（如有）说明，供 API 和前端下拉框使用
- 纯数据，无副作用

约定：
- STATUS_ENUMS 以 WorkflowModule 为键，值为对应的状态枚举
- NOT_STARTED_SENTINELS 定义 WorkflowStatusView 在没有任何事件时的默认值
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from printflow.domain.value_objects.design_status import DesignStatus
from printflow.domain.value_objects.order_status import OrderStatus
from printflow.domain.value_objects.payment_status import PaymentStatus
from printflow.domain.value_objects.production_status import ProductionStatus
from printflow.domain.value_objects.workflow_event_type import WorkflowModule

STATUS_ENUMS: dict[WorkflowModule, type[Enum]] = {
    WorkflowModule.ORDERS: OrderStatus,
    WorkflowModule.DESIGN: DesignStatus,
    WorkflowModule.PRODUCTION: ProductionStatus,
    WorkflowModule.ACCOUNTING: PaymentStatus,
}

NOT_STARTED_SENTINELS: dict[WorkflowModule, str] = {
    WorkflowModule.ORDERS: OrderStatus.PENDING.value,
    WorkflowModule.DESIGN: "not_started",
    WorkflowModule.PRODUCTION: ProductionStatus.NOT_STARTED.value,
    WorkflowModule.ACCOUNTING: PaymentStatus.NOT_STARTED.value,
}


@dataclass(frozen=True, slots=True)
class StatusCatalogEntry:
    value: str
    label: str
    description: str | None = None


def catalog_for(module: WorkflowModule) -> list[StatusCatalogEntry]:
    """返回模块的状态目录（按枚举声明顺序）"""
    entries: list[StatusCatalogEntry] = []
    for status in STATUS_ENUMS[module]:
        entries.append(
            StatusCatalogEntry(
                value=status.value,
                label=status.label,
                description=getattr(status, "description", None),
            )
        )
    return entries


def label_for(module: WorkflowModule, value: str) -> str:
    """状态值 -> 标签；未知值原样返回（历史事件可能包含目录外的状态）"""
    try:
        return STATUS_ENUMS[module](value).label
    except ValueError:
        return value
