"""日志模块

库内日志器都以 "nestedset" 为根：结构操作写入 "nestedset.core"，
持久化写入 "nestedset.orm"。
默认不添加任何处理器，由使用方决定输出方式。

使用示例:
    from nestedset.log import setup_logger

    # 查看每次结构操作的标号变化
    setup_logger("nestedset", level="DEBUG")
"""

from .logger import (
    setup_logger,
    setup_logging,
    create_formatter,
    MicrosecondFormatter,
    LoggingConfigProtocol,
    DEFAULT_LOG_FORMAT,
    core_logger,
    orm_logger,
    logger,
    get_logger,
)

__all__ = [
    "setup_logger",
    "setup_logging",
    "create_formatter",
    "MicrosecondFormatter",
    "LoggingConfigProtocol",
    "DEFAULT_LOG_FORMAT",
    "core_logger",
    "orm_logger",
    "logger",
    "get_logger",
]
