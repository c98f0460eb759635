"""Application 服务"""

from printflow.application.services.workflow_service import (
    WorkflowService,
    create_workflow_service,
)

__all__ = ["WorkflowService", "create_workflow_service"]
