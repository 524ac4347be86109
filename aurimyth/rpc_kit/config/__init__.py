"""配置模块。

使用 pydantic-settings 进行分层分级配置管理。
"""

from .settings import (
    DEFAULT_ENTRY_POINT_GROUP,
    BaseConfig,
    LogSettings,
    ModuleSettings,
)

__all__ = [
    "DEFAULT_ENTRY_POINT_GROUP",
    "BaseConfig",
    "LogSettings",
    "ModuleSettings",
]
