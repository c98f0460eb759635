"""Domain 实体"""

from printflow.domain.entities.workflow_event import WorkflowEvent
from printflow.domain.entities.workflow_rule import RuleAction, RuleCondition, WorkflowRule

__all__ = ["RuleAction", "RuleCondition", "WorkflowEvent", "WorkflowRule"]
