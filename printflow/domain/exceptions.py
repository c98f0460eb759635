"""领域层异常定义

为什么需要领域异常？
1. 业务语义清晰：DomainError 表示业务规则违反，不是技术错误
2. 异常分层：Domain 异常 vs Infrastructure 异常 vs API 异常
3. 统一处理：上层可以统一捕获 DomainError 并转换为 4xx 错误

注意：
- 设计状态的非法流转在 DesignTransitionGuard 内部不是异常（返回布尔值 + 说明文字）
- 只有宿主层（WorkflowService）决定拒绝请求时才抛出 InvalidStatusTransitionError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from printflow.domain.entities.workflow_event import WorkflowEvent


class DomainError(Exception):
    """领域层异常基类

    用途：
    - 表示业务规则违反（如：设计状态不能跳级）
    - 表示领域不变式违反（如：级联深度超限）
    """

    pass


class InvalidStatusTransitionError(DomainError):
    """状态流转被拒绝

    message 为 DesignTransitionGuard.explain() 的原文，调用方必须原样展示给请求方。
    """

    def __init__(self, current: str, attempted: str, message: str):
        self.current = current
        self.attempted = attempted
        self.message = message
        super().__init__(message)


class WorkflowCascadeError(DomainError):
    """级联深度超限（规则集配置错误）

    业务背景：
    - 规则动作会递归调用 process_event，形成触发链
    - 配置错误的规则集可能构成环（A 触发 B，B 又触发 A）
    - 超过 max_depth 视为致命配置错误，整个级联中止，不会被单条规则的异常隔离吞掉
    """

    def __init__(self, max_depth: int, event: WorkflowEvent):
        self.max_depth = max_depth
        self.event = event
        super().__init__(
            f"Workflow cascade exceeded max depth {max_depth} at "
            f"{event.type.value} -> {event.new_status!r} (order {event.order_id})"
        )
