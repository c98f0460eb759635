"""WorkflowEventStore 适配器"""

from printflow.infrastructure.event_stores.in_memory_workflow_event_store import (
    InMemoryWorkflowEventStore,
)
from printflow.infrastructure.event_stores.sqlalchemy_workflow_event_store import (
    SQLAlchemyWorkflowEventStore,
)

__all__ = ["InMemoryWorkflowEventStore", "SQLAlchemyWorkflowEventStore"]
