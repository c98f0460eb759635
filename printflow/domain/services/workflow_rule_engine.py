"""工作流规则引擎 (WorkflowRuleEngine) - 跨模块状态联动

业务定义：
- 订单、设计、生产、会计四个模块的状态需要相互保持一致
- 任一模块完成状态变更后提交 WorkflowEvent，引擎按声明式规则驱动下游模块
- 规则动作会合成下游事件并再次进入 process_event，因此引擎是“触发链”而不是单跳分发器
  例：设计 approved → 订单 confirmed → 生产 pending（三次独立的规则评估）

执行流程（process_event）：
1. 无条件把事件追加到事件日志
2. 按注册顺序对所有规则求 condition(event)
3. 对命中的规则按注册顺序依次 await action(event)（串行，不并发）
4. 单条规则动作失败：记录日志和 failed_actions，继续执行后续规则，process_event 不抛出

级联保护：
- 当前级联深度按 asyncio 任务记录在 ContextVar 中
- 超过 max_cascade_depth 视为规则集配置错误（存在环），抛出 WorkflowCascadeError
- WorkflowCascadeError 不会被单条规则的失败隔离吞掉，会一直传播到最初的调用方

并发说明：
- 单事件循环，不加锁：两个并发提交的事件，其级联可能在 await 处交错
- 引擎是显式构造的上下文对象（非模块级单例），测试可以创建相互隔离的实例
"""

from __future__ import annotations

import logging
import traceback
from collections import deque
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime

from printflow.domain.entities.workflow_event import WorkflowEvent
from printflow.domain.entities.workflow_rule import WorkflowRule
from printflow.domain.exceptions import WorkflowCascadeError
from printflow.domain.ports.workflow_event_store import WorkflowEventStore
from printflow.domain.ports.workflow_module_gateway import (
    NoopWorkflowModuleGateway,
    WorkflowModuleGateway,
)
from printflow.domain.services.workflow_status_view import WorkflowStatusView
from printflow.domain.value_objects.workflow_event_type import WorkflowEventType

logger = logging.getLogger(__name__)

DEFAULT_MAX_CASCADE_DEPTH = 16
DEFAULT_MAX_FAILED_ACTIONS = 100

_cascade_depth: ContextVar[int] = ContextVar("printflow_cascade_depth", default=0)


@dataclass(frozen=True)
class RuleActionFailure:
    """一次被隔离的规则动作失败（诊断用）

    只保存异常类型、消息和堆栈文本，不持有异常对象
    （避免 __traceback__ 钉住各帧的局部变量）。
    """

    rule_name: str
    event: WorkflowEvent
    error_type: str
    error_message: str
    traceback_text: str = ""
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class WorkflowRuleEngine:
    """工作流规则引擎

    使用示例：
        engine = WorkflowRuleEngine(InMemoryWorkflowEventStore())
        await engine.process_event(
            WorkflowEvent.create(
                type=WorkflowEventType.DESIGN_STATUS_CHANGE,
                order_id="O1",
                old_status="review",
                new_status="approved",
            )
        )
    """

    def __init__(
        self,
        store: WorkflowEventStore,
        gateway: WorkflowModuleGateway | None = None,
        *,
        max_cascade_depth: int = DEFAULT_MAX_CASCADE_DEPTH,
        register_default_rules: bool = True,
        max_failed_actions: int = DEFAULT_MAX_FAILED_ACTIONS,
    ):
        if max_cascade_depth < 1:
            raise ValueError("max_cascade_depth must be >= 1")
        if max_failed_actions < 0:
            raise ValueError("max_failed_actions must be >= 0")

        self._store = store
        self._gateway: WorkflowModuleGateway = gateway or NoopWorkflowModuleGateway()
        self._max_cascade_depth = max_cascade_depth
        self._status_view = WorkflowStatusView(store)
        self._rules: list[WorkflowRule] = []
        # 环形缓冲：只保留最近 max_failed_actions 条
        self._failed_actions: deque[RuleActionFailure] = deque(maxlen=max_failed_actions)

        if register_default_rules:
            # 延迟导入：默认规则模块依赖本类
            from printflow.domain.services.default_workflow_rules import build_default_rules

            for rule in build_default_rules(self):
                self.add_rule(rule)

    @property
    def store(self) -> WorkflowEventStore:
        return self._store

    @property
    def gateway(self) -> WorkflowModuleGateway:
        return self._gateway

    @property
    def status_view(self) -> WorkflowStatusView:
        return self._status_view

    @property
    def max_cascade_depth(self) -> int:
        return self._max_cascade_depth

    @property
    def max_failed_actions(self) -> int:
        return self._failed_actions.maxlen or 0

    @property
    def rules(self) -> tuple[WorkflowRule, ...]:
        return tuple(self._rules)

    @property
    def failed_actions(self) -> list[RuleActionFailure]:
        """被隔离的动作失败记录（只读视图）"""
        return list(self._failed_actions)

    def add_rule(self, rule: WorkflowRule) -> None:
        self._rules.append(rule)
        logger.debug(f"注册规则: {rule.display_name}, 当前规则数: {len(self._rules)}")

    async def process_event(self, event: WorkflowEvent) -> None:
        depth = _cascade_depth.get()
        if depth >= self._max_cascade_depth:
            logger.error(
                f"级联深度超限: depth={depth}, max={self._max_cascade_depth}, "
                f"event_type={event.type.value}, order_id={event.order_id}"
            )
            raise WorkflowCascadeError(self._max_cascade_depth, event)

        token = _cascade_depth.set(depth + 1)
        try:
            self._store.append(event)
            logger.debug(
                f"处理事件: {event.type.value} {event.old_status!r} -> {event.new_status!r}, "
                f"order_id={event.order_id}, depth={depth}"
            )

            matching = self._matching_rules(event)
            for rule in matching:
                await self._run_action(rule, event)
        finally:
            _cascade_depth.reset(token)

    def _matching_rules(self, event: WorkflowEvent) -> list[WorkflowRule]:
        """按注册顺序求值所有规则条件，条件异常视为未命中"""
        matching: list[WorkflowRule] = []
        for rule in list(self._rules):
            try:
                if rule.condition(event):
                    matching.append(rule)
            except Exception as e:
                logger.error(
                    f"规则条件求值异常: {rule.display_name}, "
                    f"event_type={event.type.value}, order_id={event.order_id}, error={e}",
                    exc_info=True,
                )
        return matching

    async def _run_action(self, rule: WorkflowRule, event: WorkflowEvent) -> None:
        try:
            await rule.action(event)
        except WorkflowCascadeError:
            raise
        except Exception as e:
            # 记录异常，但继续执行其他规则
            logger.error(
                f"规则动作异常: {rule.display_name}, "
                f"event_type={event.type.value}, "
                f"order_id={event.order_id}, "
                f"error={e}",
                exc_info=True,
            )
            self._failed_actions.append(
                RuleActionFailure(
                    rule_name=rule.display_name,
                    event=event,
                    error_type=type(e).__name__,
                    error_message=str(e),
                    traceback_text=traceback.format_exc(),
                )
            )

    async def emit_status_change(
        self,
        event_type: WorkflowEventType,
        order_id: str,
        new_status: str,
        *,
        triggered_by: str | None = None,
    ) -> WorkflowEvent:
        """合成下游模块的状态变更事件并递归处理

        old_status 取该模块当前派生出的状态（与 WorkflowStatusView 一致）。
        """
        event = WorkflowEvent.create(
            type=event_type,
            order_id=order_id,
            old_status=self._status_view.current_status(order_id, event_type),
            new_status=new_status,
            triggered_by=triggered_by,
        )
        await self.process_event(event)
        return event


__all__ = [
    "DEFAULT_MAX_CASCADE_DEPTH",
    "DEFAULT_MAX_FAILED_ACTIONS",
    "RuleActionFailure",
    "WorkflowRuleEngine",
]
