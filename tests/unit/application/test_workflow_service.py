"""WorkflowService 单元测试"""

import pytest

from printflow.application.services.workflow_service import (
    WorkflowService,
    create_event_store,
    create_workflow_service,
)
from printflow.config import Settings
from printflow.domain.exceptions import InvalidStatusTransitionError
from printflow.domain.value_objects.workflow_event_type import WorkflowEventType
from printflow.infrastructure.event_stores.in_memory_workflow_event_store import (
    InMemoryWorkflowEventStore,
)
from printflow.infrastructure.event_stores.sqlalchemy_workflow_event_store import (
    SQLAlchemyWorkflowEventStore,
)


class TestTriggerStatusChange:
    @pytest.mark.asyncio
    async def test_design_approved_scenario(self, workflow_service: WorkflowService):
        """测试：设计 approved 后历史至少增加两条，订单状态为 confirmed"""
        before = len(workflow_service.get_event_history())

        event = await workflow_service.trigger_status_change(
            "design_status_change", "O1", "review", "approved"
        )

        assert event.type == WorkflowEventType.DESIGN_STATUS_CHANGE
        assert len(workflow_service.get_event_history()) >= before + 2
        assert workflow_service.get_workflow_status("O1").order == "confirmed"

    @pytest.mark.asyncio
    async def test_status_reads_are_idempotent(self, workflow_service):
        await workflow_service.trigger_status_change(
            WorkflowEventType.ORDER_STATUS_CHANGE, "O1", "pending", "completed"
        )
        first = workflow_service.get_workflow_status("O1")
        second = workflow_service.get_workflow_status("O1")
        assert first == second
        assert first.payment == "pending"

    @pytest.mark.asyncio
    async def test_events_by_order(self, workflow_service):
        await workflow_service.trigger_status_change("order_status_change", "A", "", "pending")
        await workflow_service.trigger_status_change("order_status_change", "B", "", "pending")
        assert [e.order_id for e in workflow_service.get_events_by_order("A")] == ["A"]

    @pytest.mark.asyncio
    async def test_unknown_event_type_is_rejected(self, workflow_service):
        with pytest.raises(ValueError):
            await workflow_service.trigger_status_change("invoice_change", "O1", "", "x")


class TestChangeDesignStatus:
    @pytest.mark.asyncio
    async def test_valid_transition_is_recorded(self, workflow_service):
        event = await workflow_service.change_design_status("O1", "received_info", "designing")
        assert event is not None
        assert event.old_status == "received_info"
        assert workflow_service.get_workflow_status("O1").design == "designing"

    @pytest.mark.asyncio
    async def test_noop_transition_records_nothing(self, workflow_service):
        event = await workflow_service.change_design_status("O1", "editing", "editing")
        assert event is None
        assert workflow_service.get_event_history() == []

    @pytest.mark.asyncio
    async def test_rejected_transition_carries_explain_message(self, workflow_service):
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            await workflow_service.change_design_status(
                "O1", "confirmed_for_printing", "designing"
            )

        assert exc_info.value.message == workflow_service.guard.explain(
            "confirmed_for_printing", "designing"
        )
        assert "final" in str(exc_info.value)
        assert workflow_service.get_event_history() == []


class TestProjectOrderFlow:
    def test_delegates_to_projector(self, workflow_service):
        steps = workflow_service.project_order_flow("pending", "company", has_deposit=True)
        assert "deposited" not in [step.id for step in steps]


class TestComposition:
    def test_memory_store_by_default(self):
        store = create_event_store(Settings(event_store="memory"))
        assert isinstance(store, InMemoryWorkflowEventStore)

    def test_sqlalchemy_store(self):
        store = create_event_store(Settings(event_store="sqlalchemy", database_url="sqlite://"))
        assert isinstance(store, SQLAlchemyWorkflowEventStore)
        assert store.all_events() == []

    def test_settings_flow_into_engine(self):
        service = create_workflow_service(
            Settings(max_cascade_depth=4, register_default_rules=False, max_failed_actions=7)
        )
        assert service.engine.max_cascade_depth == 4
        assert service.engine.max_failed_actions == 7
        assert service.engine.rules == ()

    @pytest.mark.asyncio
    async def test_sqlalchemy_backed_cascade(self):
        service = create_workflow_service(
            Settings(event_store="sqlalchemy", database_url="sqlite://")
        )
        await service.trigger_status_change("design_status_change", "O1", "review", "approved")

        status = service.get_workflow_status("O1")
        assert status.order == "confirmed"
        assert status.production == "pending"
