"""Workflow API 路由

端点：
- POST /api/workflow/events                               记录模块状态变更并驱动联动规则
- GET  /api/workflow/events                               全部事件历史
- GET  /api/workflow/orders/{order_id}/events             订单事件历史
- GET  /api/workflow/orders/{order_id}/status             订单跨模块状态摘要
- GET  /api/workflow/orders/{order_id}/flow               订单进度投影
- POST /api/workflow/orders/{order_id}/design-status      校验并变更设计状态

错误映射：
- WorkflowCascadeError → 409（规则集存在环或级联过深）
- InvalidStatusTransitionError → 400（detail 为 explain() 原文）
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from printflow.application.services.workflow_service import WorkflowService
from printflow.domain.entities.workflow_event import ORDER_ID_MAX_LENGTH
from printflow.domain.exceptions import InvalidStatusTransitionError, WorkflowCascadeError
from printflow.domain.value_objects.customer_kind import CustomerKind
from printflow.interfaces.api.dependencies.workflow import get_workflow_service
from printflow.interfaces.api.dto.workflow_dto import (
    DesignStatusChangeRequest,
    DesignStatusChangeResponse,
    FlowStepDto,
    OrderFlowResponse,
    TriggerStatusChangeRequest,
    WorkflowEventResponse,
    WorkflowStatusResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workflow", tags=["Workflow"])


@router.post(
    "/events",
    response_model=WorkflowEventResponse,
    status_code=status.HTTP_201_CREATED,
)
async def trigger_status_change(
    request: TriggerStatusChangeRequest,
    service: WorkflowService = Depends(get_workflow_service),
) -> WorkflowEventResponse:
    try:
        event = await service.trigger_status_change(
            request.type,
            request.order_id,
            request.old_status,
            request.new_status,
            triggered_by=request.triggered_by,
        )
    except WorkflowCascadeError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return WorkflowEventResponse.from_entity(event)


@router.get("/events", response_model=list[WorkflowEventResponse])
async def get_event_history(
    service: WorkflowService = Depends(get_workflow_service),
) -> list[WorkflowEventResponse]:
    return [WorkflowEventResponse.from_entity(event) for event in service.get_event_history()]


@router.get("/orders/{order_id}/events", response_model=list[WorkflowEventResponse])
async def get_events_by_order(
    order_id: str,
    service: WorkflowService = Depends(get_workflow_service),
) -> list[WorkflowEventResponse]:
    return [
        WorkflowEventResponse.from_entity(event) for event in service.get_events_by_order(order_id)
    ]


@router.get("/orders/{order_id}/status", response_model=WorkflowStatusResponse)
async def get_workflow_status(
    order_id: str,
    service: WorkflowService = Depends(get_workflow_service),
) -> WorkflowStatusResponse:
    return WorkflowStatusResponse.from_snapshot(order_id, service.get_workflow_status(order_id))


@router.get("/orders/{order_id}/flow", response_model=OrderFlowResponse)
async def get_order_flow(
    order_id: str,
    status_value: str | None = Query(default=None, alias="status"),
    customer_kind: CustomerKind = Query(default=CustomerKind.RETAIL),
    has_deposit: bool = Query(default=False),
    service: WorkflowService = Depends(get_workflow_service),
) -> OrderFlowResponse:
    steps = service.project_order_flow(status_value, customer_kind, has_deposit)
    return OrderFlowResponse(
        order_id=order_id,
        status=status_value,
        customer_kind=customer_kind.value,
        has_deposit=has_deposit,
        cancelled=service.projector.is_cancelled(status_value),
        progress=service.projector.progress_ratio(steps),
        steps=[FlowStepDto.from_step(step) for step in steps],
    )


@router.post("/orders/{order_id}/design-status", response_model=DesignStatusChangeResponse)
async def change_design_status(
    request: DesignStatusChangeRequest,
    order_id: str = Path(..., max_length=ORDER_ID_MAX_LENGTH),
    service: WorkflowService = Depends(get_workflow_service),
) -> DesignStatusChangeResponse:
    try:
        event = await service.change_design_status(
            order_id,
            request.current,
            request.proposed,
            triggered_by=request.triggered_by,
        )
    except InvalidStatusTransitionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message) from exc
    except WorkflowCascadeError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    return DesignStatusChangeResponse(
        changed=event is not None,
        event=WorkflowEventResponse.from_entity(event) if event is not None else None,
        status=WorkflowStatusResponse.from_snapshot(
            order_id, service.get_workflow_status(order_id)
        ),
    )
