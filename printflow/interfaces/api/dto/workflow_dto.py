"""Workflow DTOs（Data Transfer Objects）

职责：
- 定义 API 请求和响应的数据结构
- 验证请求数据（Pydantic 自动校验，未知事件类型返回 422）
- 领域对象 → 响应 DTO 的转换（from_entity）
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from printflow.domain.entities.workflow_event import (
    ORDER_ID_MAX_LENGTH,
    STATUS_MAX_LENGTH,
    TRIGGERED_BY_MAX_LENGTH,
    WorkflowEvent,
)
from printflow.domain.services.order_flow_projector import FlowStep
from printflow.domain.services.workflow_status_view import WorkflowStatusSnapshot
from printflow.domain.value_objects.design_status import DesignStatus
from printflow.domain.value_objects.workflow_event_type import WorkflowEventType


class TriggerStatusChangeRequest(BaseModel):
    """模块状态变更请求"""

    type: WorkflowEventType = Field(..., description="事件类型")
    order_id: str = Field(
        ..., min_length=1, max_length=ORDER_ID_MAX_LENGTH, description="订单 ID"
    )
    old_status: str = Field(default="", max_length=STATUS_MAX_LENGTH, description="变更前状态")
    new_status: str = Field(
        ..., min_length=1, max_length=STATUS_MAX_LENGTH, description="变更后状态"
    )
    triggered_by: str | None = Field(
        default=None, max_length=TRIGGERED_BY_MAX_LENGTH, description="触发者"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "design_status_change",
                "order_id": "O1",
                "old_status": "review",
                "new_status": "approved",
            }
        }
    )


class DesignStatusChangeRequest(BaseModel):
    current: DesignStatus = Field(..., description="当前设计状态")
    proposed: DesignStatus = Field(..., description="目标设计状态")
    triggered_by: str | None = Field(default=None, max_length=TRIGGERED_BY_MAX_LENGTH)


class WorkflowEventResponse(BaseModel):
    type: WorkflowEventType
    order_id: str
    old_status: str
    new_status: str
    timestamp: datetime
    triggered_by: str | None = None

    @classmethod
    def from_entity(cls, event: WorkflowEvent) -> WorkflowEventResponse:
        return cls(
            type=event.type,
            order_id=event.order_id,
            old_status=event.old_status,
            new_status=event.new_status,
            timestamp=event.timestamp,
            triggered_by=event.triggered_by,
        )


class WorkflowStatusResponse(BaseModel):
    order_id: str
    order: str
    design: str
    production: str
    payment: str

    @classmethod
    def from_snapshot(cls, order_id: str, snapshot: WorkflowStatusSnapshot) -> WorkflowStatusResponse:
        return cls(order_id=order_id, **snapshot.to_dict())


class FlowStepDto(BaseModel):
    id: str
    label: str
    completed: bool
    active: bool

    @classmethod
    def from_step(cls, step: FlowStep) -> FlowStepDto:
        return cls(**step.to_dict())


class OrderFlowResponse(BaseModel):
    order_id: str
    status: str | None
    customer_kind: str
    has_deposit: bool
    cancelled: bool
    progress: float
    steps: list[FlowStepDto]


class DesignStatusOptionDto(BaseModel):
    value: DesignStatus
    label: str


class DesignTransitionsResponse(BaseModel):
    status: DesignStatus
    label: str
    description: str
    is_initial: bool
    is_final: bool
    next_statuses: list[DesignStatusOptionDto]
    selectable: list[DesignStatusOptionDto]


class DesignStatusChangeResponse(BaseModel):
    changed: bool
    event: WorkflowEventResponse | None = None
    status: WorkflowStatusResponse
