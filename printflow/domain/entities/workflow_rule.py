"""WorkflowRule - 声明式联动规则

一条规则 = (来源模块 → 目标模块, 条件, 动作)：
- condition: 同步谓词，判断事件是否命中
- action: 异步动作，通常会合成下游模块的新事件并递归进入 process_event
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

from printflow.domain.entities.workflow_event import WorkflowEvent
from printflow.domain.value_objects.workflow_event_type import WorkflowModule

RuleCondition = Callable[[WorkflowEvent], bool]
RuleAction = Callable[[WorkflowEvent], Coroutine[Any, Any, None]]


@dataclass(frozen=True, slots=True)
class WorkflowRule:
    from_module: WorkflowModule
    to_module: WorkflowModule
    condition: RuleCondition
    action: RuleAction
    name: str = ""

    @property
    def display_name(self) -> str:
        return self.name or f"{self.from_module.value}->{self.to_module.value}"
