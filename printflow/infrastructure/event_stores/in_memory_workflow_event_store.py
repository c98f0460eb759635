"""In-memory WorkflowEventStore adapter (Infrastructure).

列表实现：不去重、无容量上限、进程重启即清空。
"""

from __future__ import annotations

from printflow.domain.entities.workflow_event import WorkflowEvent
from printflow.domain.value_objects.workflow_event_type import WorkflowEventType


class InMemoryWorkflowEventStore:
    def __init__(self) -> None:
        self._events: list[WorkflowEvent] = []

    def append(self, event: WorkflowEvent) -> None:
        self._events.append(event)

    def all_events(self) -> list[WorkflowEvent]:
        return list(self._events)

    def events_for_order(self, order_id: str) -> list[WorkflowEvent]:
        return [event for event in self._events if event.order_id == order_id]

    def latest_of_type(
        self, order_id: str, event_type: WorkflowEventType
    ) -> WorkflowEvent | None:
        for event in reversed(self._events):
            if event.order_id == order_id and event.type == event_type:
                return event
        return None

    def __len__(self) -> int:
        return len(self._events)
