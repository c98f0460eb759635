"""WorkflowRuleEngine 单元测试

测试目标：
1. 事件无条件写入日志
2. 命中规则按注册顺序串行执行
3. 单条规则动作失败被隔离，后续规则继续执行
4. 默认规则的级联（设计 approved → 订单 confirmed → 生产 pending）
5. 级联深度保护（规则集成环时抛出 WorkflowCascadeError）
"""

import asyncio

import pytest

from printflow.domain.entities.workflow_event import WorkflowEvent
from printflow.domain.entities.workflow_rule import WorkflowRule
from printflow.domain.exceptions import WorkflowCascadeError
from printflow.domain.services.workflow_rule_engine import WorkflowRuleEngine
from printflow.domain.value_objects.workflow_event_type import WorkflowEventType, WorkflowModule
from printflow.infrastructure.event_stores.in_memory_workflow_event_store import (
    InMemoryWorkflowEventStore,
)


def make_event(event_type, new_status, order_id="O1", old_status=""):
    return WorkflowEvent.create(
        type=event_type,
        order_id=order_id,
        old_status=old_status,
        new_status=new_status,
    )


def always(event):
    return True


class RecordingGateway:
    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on

    async def _record(self, name, *args):
        self.calls.append((name, *args))
        if name == self.fail_on:
            raise RuntimeError(f"{name} unavailable")

    async def create_production_task(self, order_id):
        await self._record("create_production_task", order_id)

    async def update_order_status(self, order_id, new_status):
        await self._record("update_order_status", order_id, new_status)

    async def create_payment_record(self, order_id):
        await self._record("create_payment_record", order_id)


class TestConstruction:
    def test_default_rules_registered_in_order(self, engine):
        assert [rule.name for rule in engine.rules] == [
            "order_confirmed_creates_production",
            "production_completed_updates_order",
            "order_completed_creates_payment",
            "design_approved_confirms_order",
        ]

    def test_default_rules_can_be_disabled(self, bare_engine):
        assert bare_engine.rules == ()

    def test_max_cascade_depth_must_be_positive(self, store):
        with pytest.raises(ValueError):
            WorkflowRuleEngine(store, max_cascade_depth=0)

    def test_engines_are_isolated(self):
        first = WorkflowRuleEngine(InMemoryWorkflowEventStore(), register_default_rules=False)
        second = WorkflowRuleEngine(InMemoryWorkflowEventStore(), register_default_rules=False)

        async def noop(event):
            return None

        first.add_rule(WorkflowRule(WorkflowModule.ORDERS, WorkflowModule.DESIGN, always, noop))
        assert len(first.rules) == 1
        assert second.rules == ()


class TestProcessEvent:
    @pytest.mark.asyncio
    async def test_event_is_appended_without_matching_rules(self, bare_engine, store):
        event = make_event(WorkflowEventType.ORDER_STATUS_CHANGE, "in_production")
        await bare_engine.process_event(event)
        assert store.all_events() == [event]

    @pytest.mark.asyncio
    async def test_actions_run_sequentially_in_registration_order(self, bare_engine):
        calls = []

        def recorder(name):
            async def action(event):
                calls.append(f"{name}:start")
                await asyncio.sleep(0)
                calls.append(f"{name}:end")

            return action

        for name in ("first", "second"):
            bare_engine.add_rule(
                WorkflowRule(
                    WorkflowModule.ORDERS, WorkflowModule.PRODUCTION, always, recorder(name), name
                )
            )

        await bare_engine.process_event(make_event(WorkflowEventType.ORDER_STATUS_CHANGE, "x"))

        assert calls == ["first:start", "first:end", "second:start", "second:end"]

    @pytest.mark.asyncio
    async def test_failing_action_does_not_stop_later_rules(self, bare_engine):
        ran = []

        async def broken(event):
            raise RuntimeError("boom")

        async def healthy(event):
            ran.append(event.order_id)

        bare_engine.add_rule(
            WorkflowRule(WorkflowModule.ORDERS, WorkflowModule.PRODUCTION, always, broken, "broken")
        )
        bare_engine.add_rule(
            WorkflowRule(WorkflowModule.ORDERS, WorkflowModule.ACCOUNTING, always, healthy, "ok")
        )

        await bare_engine.process_event(make_event(WorkflowEventType.ORDER_STATUS_CHANGE, "x"))

        assert ran == ["O1"]
        assert len(bare_engine.failed_actions) == 1
        failure = bare_engine.failed_actions[0]
        assert failure.rule_name == "broken"
        assert failure.error_type == "RuntimeError"
        assert failure.error_message == "boom"
        assert "RuntimeError: boom" in failure.traceback_text

    @pytest.mark.asyncio
    async def test_raising_condition_is_treated_as_no_match(self, bare_engine, store):
        ran = []

        def bad_condition(event):
            raise KeyError("missing")

        async def action(event):
            ran.append(event)

        bare_engine.add_rule(
            WorkflowRule(WorkflowModule.ORDERS, WorkflowModule.PRODUCTION, bad_condition, action)
        )

        await bare_engine.process_event(make_event(WorkflowEventType.ORDER_STATUS_CHANGE, "x"))

        assert ran == []
        assert len(store.all_events()) == 1


class TestDefaultRuleCascades:
    @pytest.mark.asyncio
    async def test_design_approved_cascades_to_order_and_production(self, engine, store):
        await engine.process_event(
            make_event(WorkflowEventType.DESIGN_STATUS_CHANGE, "approved", old_status="review")
        )

        assert [event.type for event in store.all_events()] == [
            WorkflowEventType.DESIGN_STATUS_CHANGE,
            WorkflowEventType.ORDER_STATUS_CHANGE,
            WorkflowEventType.PRODUCTION_STATUS_CHANGE,
        ]
        snapshot = engine.status_view.status_of("O1")
        assert snapshot.order == "confirmed"
        assert snapshot.production == "pending"
        assert snapshot.design == "approved"
        assert snapshot.payment == "not_started"

    @pytest.mark.asyncio
    async def test_synthesized_events_carry_derived_old_status_and_trigger(self, engine, store):
        await engine.process_event(make_event(WorkflowEventType.DESIGN_STATUS_CHANGE, "approved"))

        _, order_event, production_event = store.all_events()
        assert order_event.old_status == "pending"
        assert order_event.triggered_by == "workflow:design_approved_confirms_order"
        assert production_event.old_status == "not_started"
        assert production_event.triggered_by == "workflow:order_confirmed_creates_production"

    @pytest.mark.asyncio
    async def test_production_completed_updates_order(self, engine):
        await engine.process_event(
            make_event(WorkflowEventType.PRODUCTION_STATUS_CHANGE, "completed")
        )
        assert engine.status_view.status_of("O1").order == "production_completed"

    @pytest.mark.asyncio
    async def test_order_completed_creates_payment(self, engine):
        await engine.process_event(make_event(WorkflowEventType.ORDER_STATUS_CHANGE, "completed"))
        assert engine.status_view.status_of("O1").payment == "pending"

    @pytest.mark.asyncio
    async def test_gateway_is_called_for_each_hop(self, store):
        gateway = RecordingGateway()
        engine = WorkflowRuleEngine(store, gateway)

        await engine.process_event(make_event(WorkflowEventType.DESIGN_STATUS_CHANGE, "approved"))

        assert gateway.calls == [
            ("update_order_status", "O1", "confirmed"),
            ("create_production_task", "O1"),
        ]

    @pytest.mark.asyncio
    async def test_gateway_failure_stops_only_that_hop(self, store):
        gateway = RecordingGateway(fail_on="create_production_task")
        engine = WorkflowRuleEngine(store, gateway)

        await engine.process_event(make_event(WorkflowEventType.DESIGN_STATUS_CHANGE, "approved"))

        snapshot = engine.status_view.status_of("O1")
        assert snapshot.order == "confirmed"
        assert snapshot.production == "not_started"
        assert [f.rule_name for f in engine.failed_actions] == [
            "order_confirmed_creates_production"
        ]

    @pytest.mark.asyncio
    async def test_concurrent_cascades_for_different_orders(self, engine):
        await asyncio.gather(
            engine.process_event(
                make_event(WorkflowEventType.DESIGN_STATUS_CHANGE, "approved", order_id="A")
            ),
            engine.process_event(
                make_event(WorkflowEventType.DESIGN_STATUS_CHANGE, "approved", order_id="B")
            ),
        )
        for order_id in ("A", "B"):
            assert engine.status_view.status_of(order_id).production == "pending"


class TestCascadeGuard:
    @pytest.mark.asyncio
    async def test_cyclic_rule_set_raises_cascade_error(self, store):
        engine = WorkflowRuleEngine(store, max_cascade_depth=3, register_default_rules=False)

        async def ping_pong(event):
            await engine.emit_status_change(
                WorkflowEventType.ORDER_STATUS_CHANGE, event.order_id, "pending"
            )

        engine.add_rule(
            WorkflowRule(WorkflowModule.ORDERS, WorkflowModule.ORDERS, always, ping_pong, "loop")
        )

        with pytest.raises(WorkflowCascadeError) as exc_info:
            await engine.process_event(make_event(WorkflowEventType.ORDER_STATUS_CHANGE, "x"))

        assert exc_info.value.max_depth == 3
        assert len(store.all_events()) == 3
        # 配置错误不计入被隔离的动作失败
        assert engine.failed_actions == []

    @pytest.mark.asyncio
    async def test_depth_resets_after_cascade_error(self, store):
        engine = WorkflowRuleEngine(store, max_cascade_depth=2, register_default_rules=False)

        async def loop(event):
            await engine.emit_status_change(event.type, event.order_id, "again")

        engine.add_rule(
            WorkflowRule(
                WorkflowModule.DESIGN,
                WorkflowModule.DESIGN,
                lambda e: e.type == WorkflowEventType.DESIGN_STATUS_CHANGE,
                loop,
            )
        )

        with pytest.raises(WorkflowCascadeError):
            await engine.process_event(make_event(WorkflowEventType.DESIGN_STATUS_CHANGE, "x"))

        # 不命中环的事件仍能正常处理
        await engine.process_event(make_event(WorkflowEventType.ORDER_STATUS_CHANGE, "ok"))
        assert store.all_events()[-1].new_status == "ok"


class TestFailedActionsBuffer:
    """失败记录是有界的环形缓冲，且不持有异常对象"""

    @staticmethod
    def _add_broken_rule(engine):
        async def broken(event):
            payload = bytearray(100_000)  # noqa: F841
            raise RuntimeError(f"failed for {event.order_id}")

        engine.add_rule(
            WorkflowRule(WorkflowModule.ORDERS, WorkflowModule.PRODUCTION, always, broken, "broken")
        )

    @pytest.mark.asyncio
    async def test_only_most_recent_failures_are_kept(self, store):
        engine = WorkflowRuleEngine(store, register_default_rules=False, max_failed_actions=100)
        self._add_broken_rule(engine)

        for index in range(500):
            await engine.process_event(
                make_event(WorkflowEventType.ORDER_STATUS_CHANGE, "x", order_id=f"O{index}")
            )

        failures = engine.failed_actions
        assert len(failures) == 100
        assert failures[0].event.order_id == "O400"
        assert failures[-1].event.order_id == "O499"
        # 事件日志本身不受缓冲上限影响
        assert len(store.all_events()) == 500

    @pytest.mark.asyncio
    async def test_failure_record_does_not_hold_exception(self, bare_engine):
        self._add_broken_rule(bare_engine)

        await bare_engine.process_event(make_event(WorkflowEventType.ORDER_STATUS_CHANGE, "x"))

        failure = bare_engine.failed_actions[0]
        assert not any(isinstance(value, BaseException) for value in vars(failure).values())
        assert failure.error_message == "failed for O1"

    @pytest.mark.asyncio
    async def test_zero_capacity_keeps_nothing(self, store):
        engine = WorkflowRuleEngine(store, register_default_rules=False, max_failed_actions=0)
        self._add_broken_rule(engine)

        await engine.process_event(make_event(WorkflowEventType.ORDER_STATUS_CHANGE, "x"))

        assert engine.failed_actions == []

    def test_negative_capacity_is_rejected(self, store):
        with pytest.raises(ValueError):
            WorkflowRuleEngine(store, max_failed_actions=-1)
