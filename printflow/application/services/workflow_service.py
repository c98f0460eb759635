"""WorkflowService - 工作流核心对宿主应用暴露的门面

职责：
1. 接收各业务模块的状态变更（trigger_status_change），构造 WorkflowEvent 并交给规则引擎
2. 设计状态变更先经过 DesignTransitionGuard：被拒绝时抛出 InvalidStatusTransitionError，
   消息为 explain() 原文
3. 只读查询：订单状态摘要、事件历史、按订单过滤的事件、订单进度投影

实例是应用级的显式上下文对象（由 create_workflow_service 组装），不是模块级单例。
"""

from __future__ import annotations

import logging

from printflow.config import Settings
from printflow.domain.entities.workflow_event import WorkflowEvent
from printflow.domain.exceptions import InvalidStatusTransitionError
from printflow.domain.ports.workflow_event_store import WorkflowEventStore
from printflow.domain.ports.workflow_module_gateway import WorkflowModuleGateway
from printflow.domain.services.design_transition_guard import DesignTransitionGuard
from printflow.domain.services.order_flow_projector import FlowStep, OrderFlowProjector
from printflow.domain.services.workflow_rule_engine import WorkflowRuleEngine
from printflow.domain.services.workflow_status_view import (
    WorkflowStatusSnapshot,
    WorkflowStatusView,
)
from printflow.domain.value_objects.customer_kind import CustomerKind
from printflow.domain.value_objects.design_status import DesignStatus
from printflow.domain.value_objects.order_status import OrderStatus
from printflow.domain.value_objects.workflow_event_type import WorkflowEventType

logger = logging.getLogger(__name__)


class WorkflowService:
    def __init__(
        self,
        engine: WorkflowRuleEngine,
        status_view: WorkflowStatusView | None = None,
        guard: DesignTransitionGuard | None = None,
        projector: OrderFlowProjector | None = None,
    ):
        self.engine = engine
        self.status_view = status_view or engine.status_view
        self.guard = guard or DesignTransitionGuard()
        self.projector = projector or OrderFlowProjector()

    @property
    def store(self) -> WorkflowEventStore:
        return self.engine.store

    async def trigger_status_change(
        self,
        type: WorkflowEventType | str,
        order_id: str,
        old_status: str,
        new_status: str,
        triggered_by: str | None = None,
    ) -> WorkflowEvent:
        """记录一次模块状态变更并驱动联动规则

        规则动作失败不会抛出（见 engine.failed_actions）；
        级联超限抛出 WorkflowCascadeError。
        """
        event = WorkflowEvent.create(
            type=type,
            order_id=order_id,
            old_status=old_status,
            new_status=new_status,
            triggered_by=triggered_by,
        )
        logger.info(
            f"状态变更: {event.type.value} {old_status!r} -> {new_status!r}, order_id={order_id}"
        )
        await self.engine.process_event(event)
        return event

    async def change_design_status(
        self,
        order_id: str,
        current: DesignStatus | str,
        proposed: DesignStatus | str,
        triggered_by: str | None = None,
    ) -> WorkflowEvent | None:
        """校验并记录设计状态变更

        - 非法流转：抛出 InvalidStatusTransitionError（消息为 explain() 原文）
        - 状态未变化：不记录事件，返回 None
        """
        check = self.guard.check(current, proposed)
        if not check.allowed:
            logger.warning(
                f"设计状态流转被拒绝: order_id={order_id}, "
                f"{check.current.value} -> {check.proposed.value}"
            )
            raise InvalidStatusTransitionError(
                check.current.value, check.proposed.value, check.message or ""
            )

        if check.current == check.proposed:
            return None

        return await self.trigger_status_change(
            WorkflowEventType.DESIGN_STATUS_CHANGE,
            order_id,
            check.current.value,
            check.proposed.value,
            triggered_by=triggered_by,
        )

    def get_workflow_status(self, order_id: str) -> WorkflowStatusSnapshot:
        return self.status_view.status_of(order_id)

    def get_event_history(self) -> list[WorkflowEvent]:
        return self.store.all_events()

    def get_events_by_order(self, order_id: str) -> list[WorkflowEvent]:
        return self.store.events_for_order(order_id)

    def project_order_flow(
        self,
        current_status: OrderStatus | str | None,
        customer_kind: CustomerKind | str,
        has_deposit: bool,
    ) -> list[FlowStep]:
        return self.projector.project(current_status, customer_kind, has_deposit)


def create_event_store(settings: Settings) -> WorkflowEventStore:
    """按配置创建事件日志存储"""
    if settings.event_store == "sqlalchemy":
        from printflow.infrastructure.database.engine import (
            create_session_factory,
            get_sync_engine,
        )
        from printflow.infrastructure.database.schema import ensure_schema
        from printflow.infrastructure.event_stores.sqlalchemy_workflow_event_store import (
            SQLAlchemyWorkflowEventStore,
        )

        engine = get_sync_engine(settings.database_url, echo=settings.debug)
        ensure_schema(engine)
        logger.info("工作流事件日志使用 SQLAlchemy 存储")
        return SQLAlchemyWorkflowEventStore(create_session_factory(engine))

    from printflow.infrastructure.event_stores.in_memory_workflow_event_store import (
        InMemoryWorkflowEventStore,
    )

    logger.info("工作流事件日志使用内存存储（进程重启即清空）")
    return InMemoryWorkflowEventStore()


def create_workflow_service(
    settings: Settings,
    gateway: WorkflowModuleGateway | None = None,
) -> WorkflowService:
    """组装根：store → engine → view → service"""
    store = create_event_store(settings)
    engine = WorkflowRuleEngine(
        store,
        gateway,
        max_cascade_depth=settings.max_cascade_depth,
        register_default_rules=settings.register_default_rules,
        max_failed_actions=settings.max_failed_actions,
    )
    return WorkflowService(engine)


__all__ = ["WorkflowService", "create_event_store", "create_workflow_service"]
