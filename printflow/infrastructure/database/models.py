"""ORM 模型 - 数据库表映射

ORM 模型 vs 领域实体：
- ORM 模型：数据库表映射，关注持久化（Infrastructure 层）
- 领域实体：WorkflowEvent，不可变的历史记录（Domain 层）
- 通过 SQLAlchemyWorkflowEventStore 转换：ORM ⇄ Entity
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from printflow.domain.entities.workflow_event import (
    ORDER_ID_MAX_LENGTH,
    STATUS_MAX_LENGTH,
    TRIGGERED_BY_MAX_LENGTH,
)
from printflow.infrastructure.database.base import Base


class WorkflowEventModel(Base):
    """WorkflowEvent ORM 模型

    表名：workflow_events

    字段说明：
    - sequence: 自增主键，定义插入顺序（查询一律按它排序）
    - type: 事件类型（order_status_change 等）
    - order_id: 订单 ID（弱引用，不建外键）
    - old_status / new_status: 状态字符串
    - timestamp: 事件时间（UTC，存储为无时区时间）
    - triggered_by: 触发者（用户或 workflow:<规则名>），可选
    """

    __tablename__ = "workflow_events"

    sequence: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    order_id: Mapped[str] = mapped_column(String(ORDER_ID_MAX_LENGTH), nullable=False)
    old_status: Mapped[str] = mapped_column(String(STATUS_MAX_LENGTH), nullable=False, default="")
    new_status: Mapped[str] = mapped_column(String(STATUS_MAX_LENGTH), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    triggered_by: Mapped[str | None] = mapped_column(
        String(TRIGGERED_BY_MAX_LENGTH), nullable=True
    )

    __table_args__ = (
        Index("idx_workflow_events_order_id", "order_id"),
        Index("idx_workflow_events_order_type", "order_id", "type"),
    )

    def __repr__(self) -> str:
        return (
            f"<WorkflowEventModel(sequence={self.sequence}, type={self.type}, "
            f"order_id={self.order_id}, new_status={self.new_status})>"
        )
