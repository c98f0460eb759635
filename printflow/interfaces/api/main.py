"""FastAPI 应用入口"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from printflow.application.services.workflow_service import (
    WorkflowService,
    create_workflow_service,
)
from printflow.config import Settings, settings
from printflow.interfaces.api.routes import design_statuses, health, status_catalog, workflow
from printflow.logging_config import configure_logging


def create_app(
    app_settings: Settings | None = None,
    workflow_service: WorkflowService | None = None,
) -> FastAPI:
    """创建 FastAPI 应用

    WorkflowService 是应用级对象，保存在 app.state 上；测试可以传入隔离的实例。
    """
    app_settings = app_settings or settings
    configure_logging(app_settings)

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        debug=app_settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = app_settings
    app.state.workflow_service = workflow_service or create_workflow_service(app_settings)

    app.include_router(health.router)
    app.include_router(workflow.router, prefix="/api")
    app.include_router(design_statuses.router, prefix="/api")
    app.include_router(status_catalog.router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "printflow.interfaces.api.main:app",
        host=settings.host,
        port=settings.port,
    )
