"""Dependency helper for retrieving the WorkflowService from app.state."""

from __future__ import annotations

from fastapi import Request

from printflow.application.services.workflow_service import WorkflowService


def get_workflow_service(request: Request) -> WorkflowService:
    service = getattr(request.app.state, "workflow_service", None)
    if service is None:
        raise RuntimeError("WorkflowService is not initialized (create_app not used).")
    return service
