"""数据库引擎配置

设计说明：
- 使用工厂函数创建同步引擎（事件日志的 append 是同步操作）
- 不在导入时创建全局引擎：事件存储默认是内存实现，只有配置了 sqlalchemy 才连接数据库
- SQLite 内存库使用 StaticPool，保证同一进程内所有会话看到同一个库
"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def _is_sqlite_memory(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:")


def get_sync_engine(database_url: str, *, echo: bool = False) -> Engine:
    """创建同步数据库引擎

    sqlite+aiosqlite:///... 会被转换为 sqlite:///...
    """
    sync_url = database_url.replace("+aiosqlite", "")

    if _is_sqlite_memory(sync_url):
        return create_engine(
            sync_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if sync_url.startswith("sqlite"):
        return create_engine(
            sync_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        sync_url,
        echo=echo,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
