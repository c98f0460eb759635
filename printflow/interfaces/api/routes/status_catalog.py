"""状态目录端点（各模块状态值 + 标签 + 说明，供下拉框和徽标使用）"""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from printflow.domain.value_objects.status_catalog import catalog_for, label_for
from printflow.domain.value_objects.workflow_event_type import WorkflowModule

router = APIRouter(prefix="/status-catalog", tags=["Status catalog"])


class StatusCatalogEntryDto(BaseModel):
    value: str
    label: str
    description: str | None = None


@router.get("/{module}", response_model=list[StatusCatalogEntryDto])
async def get_status_catalog(module: WorkflowModule) -> list[StatusCatalogEntryDto]:
    return [
        StatusCatalogEntryDto(value=entry.value, label=entry.label, description=entry.description)
        for entry in catalog_for(module)
    ]


@router.get("/{module}/{value}/label")
async def get_status_label(module: WorkflowModule, value: str) -> dict[str, str]:
    """目录外的历史状态原样返回"""
    return {"value": value, "label": label_for(module, value)}
