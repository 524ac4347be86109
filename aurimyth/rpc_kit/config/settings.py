"""共享配置基类。

使用 pydantic-settings 进行分层分级配置管理。
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENTRY_POINT_GROUP = "aurimyth.rpc_kit.client_modules"


class ModuleSettings(BaseSettings):
    """扩展模块发现配置。

    环境变量前缀: RPC_MODULES_
    示例: RPC_MODULES_ENTRY_POINT_GROUP, RPC_MODULES_STRICT, RPC_MODULES_DISABLED

    strict 说明：
    - true: 模块加载或初始化失败时中止启动（默认）
    - false: 记录警告日志并跳过该模块
    """

    entry_point_group: str = Field(
        default=DEFAULT_ENTRY_POINT_GROUP,
        description="扩展模块入口点分组名称"
    )
    strict: bool = Field(
        default=True,
        description="模块失败时是否中止启动"
    )
    disabled: list[str] = Field(
        default_factory=list,
        description="禁用的入口点名称列表"
    )

    model_config = SettingsConfigDict(
        env_prefix="RPC_MODULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class LogSettings(BaseSettings):
    """日志配置。

    环境变量前缀: LOG_
    示例: LOG_LEVEL, LOG_FILE
    """

    level: str = Field(
        default="INFO",
        description="日志级别"
    )
    file: str | None = Field(
        default=None,
        description="日志文件路径（如果不设置则仅输出到控制台）"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class BaseConfig(BaseSettings):
    """基础配置类。

    使用 pydantic-settings 自动从环境变量和 .env 文件加载配置。
    """

    # 扩展模块配置
    modules: ModuleSettings = Field(default_factory=ModuleSettings)

    # 日志配置
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


__all__ = [
    "DEFAULT_ENTRY_POINT_GROUP",
    "BaseConfig",
    "LogSettings",
    "ModuleSettings",
]
