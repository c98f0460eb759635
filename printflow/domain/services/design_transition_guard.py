"""设计状态流转守卫 (DesignTransitionGuard)

业务定义：
- 设计状态是严格的状态机，只有一个分支点：
  waiting_for_customer_approval → editing（客户要求修改）
                                → confirmed_for_printing（客户确认）
- 不允许跳级（如 received_info → confirmed_for_printing）
- confirmed_for_printing 为终态，不允许任何流出

调用约定：
- 持久化设计状态变更之前必须先调用 is_valid()
- 被拒绝时必须把 explain() 的文本原样返回给请求方
- 非法流转不是异常：守卫只返回布尔值和说明文字，由调用方决定是否拒绝请求

纯函数，无副作用；输入既可以是枚举也可以是原始字符串。
"""

from __future__ import annotations

from dataclasses import dataclass

from printflow.domain.value_objects.design_status import DesignStatus

_TRANSITIONS: dict[DesignStatus, tuple[DesignStatus, ...]] = {
    DesignStatus.RECEIVED_INFO: (DesignStatus.DESIGNING,),
    DesignStatus.DESIGNING: (DesignStatus.WAITING_FOR_CUSTOMER_APPROVAL,),
    DesignStatus.WAITING_FOR_CUSTOMER_APPROVAL: (
        DesignStatus.EDITING,
        DesignStatus.CONFIRMED_FOR_PRINTING,
    ),
    DesignStatus.EDITING: (DesignStatus.WAITING_FOR_CUSTOMER_APPROVAL,),
    DesignStatus.CONFIRMED_FOR_PRINTING: (),
}

INITIAL_STATUS = DesignStatus.RECEIVED_INFO
FINAL_STATUS = DesignStatus.CONFIRMED_FOR_PRINTING


@dataclass(frozen=True, slots=True)
class TransitionCheck:
    """一次流转校验的结果（allowed 为 False 时 message 为拒绝原因）"""

    current: DesignStatus
    proposed: DesignStatus
    allowed: bool
    message: str | None = None


class DesignTransitionGuard:
    """设计状态机

    使用示例：
        guard = DesignTransitionGuard()
        if not guard.is_valid("designing", "confirmed_for_printing"):
            raise HTTPException(400, guard.explain("designing", "confirmed_for_printing"))
    """

    def valid_transitions(self, current: DesignStatus | str) -> frozenset[DesignStatus]:
        """当前状态的合法后继集合（终态返回空集）"""
        return frozenset(_TRANSITIONS[DesignStatus.from_value(current)])

    def is_valid(self, current: DesignStatus | str, proposed: DesignStatus | str) -> bool:
        current = DesignStatus.from_value(current)
        proposed = DesignStatus.from_value(proposed)
        # 状态未变化视为合法（no-op）
        if current == proposed:
            return True
        return proposed in _TRANSITIONS[current]

    def explain(self, current: DesignStatus | str, attempted: DesignStatus | str) -> str:
        """非法流转的可读原因

        终态单独给出“这是最终状态”的说明，而不是笼统的“非法流转”。
        """
        current = DesignStatus.from_value(current)
        attempted = DesignStatus.from_value(attempted)

        if self.is_final_status(current):
            return (
                f'Cannot change status from "{current.label}" '
                "because it is the final status."
            )

        successors = _TRANSITIONS[current]
        if not successors:
            return f'Cannot change status from "{current.label}".'

        allowed = " or ".join(f'"{status.label}"' for status in successors)
        return (
            f'Cannot change from "{current.label}" to "{attempted.label}". '
            f"It can only move to {allowed}."
        )

    def check(self, current: DesignStatus | str, proposed: DesignStatus | str) -> TransitionCheck:
        """is_valid + explain 合并为一次调用"""
        current = DesignStatus.from_value(current)
        proposed = DesignStatus.from_value(proposed)
        if self.is_valid(current, proposed):
            return TransitionCheck(current=current, proposed=proposed, allowed=True)
        return TransitionCheck(
            current=current,
            proposed=proposed,
            allowed=False,
            message=self.explain(current, proposed),
        )

    def selectable_statuses(self, current: DesignStatus | str) -> list[DesignStatus]:
        """状态下拉框可选项：当前状态 + 合法后继（按转换表顺序）"""
        current = DesignStatus.from_value(current)
        return [current, *_TRANSITIONS[current]]

    def is_initial_status(self, status: DesignStatus | str) -> bool:
        return DesignStatus.from_value(status) == INITIAL_STATUS

    def is_final_status(self, status: DesignStatus | str) -> bool:
        return DesignStatus.from_value(status) == FINAL_STATUS


_default_guard = DesignTransitionGuard()


def get_valid_next_statuses(current: DesignStatus | str) -> list[DesignStatus]:
    return list(_TRANSITIONS[DesignStatus.from_value(current)])


def is_valid_status_transition(current: DesignStatus | str, new: DesignStatus | str) -> bool:
    return _default_guard.is_valid(current, new)


def get_transition_error_message(current: DesignStatus | str, attempted: DesignStatus | str) -> str:
    return _default_guard.explain(current, attempted)


def is_initial_status(status: DesignStatus | str) -> bool:
    return _default_guard.is_initial_status(status)


def is_final_status(status: DesignStatus | str) -> bool:
    return _default_guard.is_final_status(status)


__all__ = [
    "DesignTransitionGuard",
    "FINAL_STATUS",
    "INITIAL_STATUS",
    "TransitionCheck",
    "get_transition_error_message",
    "get_valid_next_statuses",
    "is_final_status",
    "is_initial_status",
    "is_valid_status_transition",
]
