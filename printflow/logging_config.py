"""日志配置

各模块使用 logging.getLogger(__name__)，这里只在应用启动时统一设置级别和格式。
"""

import logging

from printflow.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("printflow").setLevel(level)
    if not settings.debug:
        # 非调试模式下不输出 SQL
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
