"""SQLAlchemy WorkflowEventStore 实现

职责：
- WorkflowEvent 领域实体 <-> WorkflowEventModel ORM 模型转换
- append：每次追加独立提交（引擎是 best-effort 协调器，级联不在一个事务里）
- 查询按自增 sequence 排序，保证与内存实现一致的插入顺序
"""

from __future__ import annotations

from datetime import UTC

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from printflow.domain.entities.workflow_event import WorkflowEvent
from printflow.domain.value_objects.workflow_event_type import WorkflowEventType
from printflow.infrastructure.database.models import WorkflowEventModel


class SQLAlchemyWorkflowEventStore:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def _to_entity(self, model: WorkflowEventModel) -> WorkflowEvent:
        timestamp = (
            model.timestamp.replace(tzinfo=UTC)
            if model.timestamp.tzinfo is None
            else model.timestamp
        )
        return WorkflowEvent(
            type=WorkflowEventType(model.type),
            order_id=model.order_id,
            old_status=model.old_status,
            new_status=model.new_status,
            timestamp=timestamp,
            triggered_by=model.triggered_by,
        )

    def _to_model(self, entity: WorkflowEvent) -> WorkflowEventModel:
        timestamp = entity.timestamp
        if timestamp.tzinfo is not None:
            timestamp = timestamp.astimezone(UTC).replace(tzinfo=None)
        return WorkflowEventModel(
            type=entity.type.value,
            order_id=entity.order_id,
            old_status=entity.old_status,
            new_status=entity.new_status,
            timestamp=timestamp,
            triggered_by=entity.triggered_by,
        )

    def append(self, event: WorkflowEvent) -> None:
        with self._session_factory() as session, session.begin():
            session.add(self._to_model(event))

    def all_events(self) -> list[WorkflowEvent]:
        with self._session_factory() as session:
            models = session.scalars(
                select(WorkflowEventModel).order_by(WorkflowEventModel.sequence)
            ).all()
            return [self._to_entity(model) for model in models]

    def events_for_order(self, order_id: str) -> list[WorkflowEvent]:
        with self._session_factory() as session:
            models = session.scalars(
                select(WorkflowEventModel)
                .where(WorkflowEventModel.order_id == order_id)
                .order_by(WorkflowEventModel.sequence)
            ).all()
            return [self._to_entity(model) for model in models]

    def latest_of_type(
        self, order_id: str, event_type: WorkflowEventType
    ) -> WorkflowEvent | None:
        with self._session_factory() as session:
            model = session.scalars(
                select(WorkflowEventModel)
                .where(
                    WorkflowEventModel.order_id == order_id,
                    WorkflowEventModel.type == event_type.value,
                )
                .order_by(WorkflowEventModel.sequence.desc())
                .limit(1)
            ).first()
            return self._to_entity(model) if model is not None else None
