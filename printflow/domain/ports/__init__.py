"""Domain 端口"""

from printflow.domain.ports.workflow_event_store import WorkflowEventStore
from printflow.domain.ports.workflow_module_gateway import (
    NoopWorkflowModuleGateway,
    WorkflowModuleGateway,
)

__all__ = ["NoopWorkflowModuleGateway", "WorkflowEventStore", "WorkflowModuleGateway"]
