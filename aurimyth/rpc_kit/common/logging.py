"""日志管理器 - 统一的日志配置和管理。

提供：
- 统一的日志配置
- 日志混入类（按类绑定日志器）
"""

from __future__ import annotations

from loguru import logger

from aurimyth.rpc_kit.config import LogSettings

# 移除默认配置，由setup_logging统一配置
logger.remove()


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    settings: LogSettings | None = None,
) -> None:
    """设置日志配置。

    未显式传入的参数从日志配置读取（环境变量 LOG_LEVEL、LOG_FILE）。

    Args:
        log_level: 日志级别（默认：配置中的级别）
        log_file: 日志文件路径（可选，不设置则仅输出到控制台）
        settings: 日志配置（默认从环境变量加载）
    """
    if settings is None:
        settings = LogSettings()
    log_level = (log_level or settings.level).upper()
    log_file = log_file or settings.file

    # 控制台输出
    logger.add(
        lambda msg: print(msg, end=""),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=log_level,
        colorize=True,
    )

    # 文件输出
    if log_file:
        logger.add(
            log_file,
            rotation="00:00",
            retention="7 days",
            level=log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            encoding="utf-8",
            enqueue=True,  # 异步写入
        )

    logger.info(f"日志系统初始化完成，级别: {log_level}")


class LoggerMixin:
    """日志混入类。

    为类提供日志功能。

    使用示例:
        class Introspector(LoggerMixin):
            def build(self):
                self.logger.debug("构建调用描述")
    """

    @property
    def logger(self):
        """获取类专用的日志器。"""
        class_name = self.__class__.__name__
        module_name = self.__class__.__module__
        return logger.bind(name=f"{module_name}.{class_name}")


__all__ = [
    "logger",
    "setup_logging",
    "LoggerMixin",
]
