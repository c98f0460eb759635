"""应用配置模块 - 使用 Pydantic Settings 管理环境变量"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置类"""

    model_config = SettingsConfigDict(
        env_prefix="PRINTFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="PrintFlow Workflow", description="应用名称")
    app_version: str = Field(default="0.1.0", description="应用版本")
    env: Literal["development", "production", "test"] = Field(
        default="development", description="运行环境"
    )
    debug: bool = Field(default=False, description="调试模式")
    log_level: str = Field(default="INFO", description="日志级别")

    # Server
    host: str = Field(default="0.0.0.0", description="服务器地址")
    port: int = Field(default=8000, description="服务器端口")

    # Event store
    event_store: Literal["memory", "sqlalchemy"] = Field(
        default="memory", description="工作流事件日志存储（memory 重启即丢失）"
    )
    database_url: str = Field(
        default="sqlite:///./printflow.db",
        description="数据库连接 URL（event_store=sqlalchemy 时使用）",
    )

    # Workflow engine
    max_cascade_depth: int = Field(default=16, ge=1, description="规则级联最大深度")
    register_default_rules: bool = Field(default=True, description="启动时注册默认联动规则")
    max_failed_actions: int = Field(
        default=100, ge=0, description="保留的规则动作失败记录条数（环形缓冲）"
    )

    # CORS
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        description="允许的跨域源",
    )


# 全局配置实例
settings = Settings()
