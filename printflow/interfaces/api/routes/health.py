"""健康检查端点

配置取自 create_app() 放在 app.state.settings 上的实例，而不是模块级 settings。
"""

from fastapi import APIRouter, Request

from printflow.config import Settings

router = APIRouter(prefix="/health", tags=["Health"])


def _app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("")
async def health_check(request: Request) -> dict[str, str]:
    """基本健康检查"""
    return {
        "status": "healthy",
        "service": _app_settings(request).app_name,
    }


@router.get("/version")
async def version_info(request: Request) -> dict[str, str]:
    """版本信息"""
    app_settings = _app_settings(request)
    return {
        "app_name": app_settings.app_name,
        "version": app_settings.app_version,
        "environment": app_settings.env,
    }
