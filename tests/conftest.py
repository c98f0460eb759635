"""Pytest 配置文件 - 全局 fixtures

每个测试都构造独立的 store / engine / service，互不共享事件日志和规则。
"""

import pytest
from fastapi.testclient import TestClient

from printflow.application.services.workflow_service import WorkflowService
from printflow.config import Settings
from printflow.domain.services.workflow_rule_engine import WorkflowRuleEngine
from printflow.infrastructure.event_stores.in_memory_workflow_event_store import (
    InMemoryWorkflowEventStore,
)


@pytest.fixture
def store() -> InMemoryWorkflowEventStore:
    return InMemoryWorkflowEventStore()


@pytest.fixture
def engine(store: InMemoryWorkflowEventStore) -> WorkflowRuleEngine:
    """带默认规则的引擎"""
    return WorkflowRuleEngine(store)


@pytest.fixture
def bare_engine(store: InMemoryWorkflowEventStore) -> WorkflowRuleEngine:
    """不注册默认规则的引擎"""
    return WorkflowRuleEngine(store, register_default_rules=False)


@pytest.fixture
def workflow_service(engine: WorkflowRuleEngine) -> WorkflowService:
    return WorkflowService(engine)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(env="test", event_store="memory", log_level="WARNING")


@pytest.fixture
def client(test_settings: Settings, workflow_service: WorkflowService) -> TestClient:
    """FastAPI 测试客户端（隔离的 WorkflowService）"""
    from printflow.interfaces.api.main import create_app

    return TestClient(create_app(test_settings, workflow_service))
