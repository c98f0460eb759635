"""设计状态目录与流转查询（供状态下拉框预过滤选项）"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from printflow.application.services.workflow_service import WorkflowService
from printflow.domain.value_objects.design_status import DesignStatus
from printflow.interfaces.api.dependencies.workflow import get_workflow_service
from printflow.interfaces.api.dto.workflow_dto import (
    DesignStatusOptionDto,
    DesignTransitionsResponse,
)

router = APIRouter(prefix="/design-statuses", tags=["Design"])


def _option(status: DesignStatus) -> DesignStatusOptionDto:
    return DesignStatusOptionDto(value=status, label=status.label)


@router.get("", response_model=list[DesignStatusOptionDto])
async def list_design_statuses() -> list[DesignStatusOptionDto]:
    return [_option(status) for status in DesignStatus]


@router.get("/{status}/transitions", response_model=DesignTransitionsResponse)
async def get_design_transitions(
    status: DesignStatus,
    service: WorkflowService = Depends(get_workflow_service),
) -> DesignTransitionsResponse:
    guard = service.guard
    # 按声明顺序输出，保证下拉框顺序稳定
    next_statuses = [s for s in DesignStatus if s in guard.valid_transitions(status)]
    return DesignTransitionsResponse(
        status=status,
        label=status.label,
        description=status.description,
        is_initial=guard.is_initial_status(status),
        is_final=guard.is_final_status(status),
        next_statuses=[_option(s) for s in next_statuses],
        selectable=[_option(s) for s in guard.selectable_statuses(status)],
    )
