"""
依赖注入容器

使用示例：
    from infrastructure.containers import bootstrap

    boot = bootstrap()
    reader = boot.app.mail_reader_service()
"""

from dataclasses import dataclass
from typing import Optional

from dependency_injector import providers

from infrastructure.config.settings import Settings
from .config import ConfigContainer
from .infrastructure import InfraContainer
from .application import AppContainer


@dataclass
class Bootstrap:
    """已连接的容器集合"""

    config: ConfigContainer
    infra: InfraContainer
    app: AppContainer


def bootstrap(settings: Optional[Settings] = None) -> Bootstrap:
    """
    创建并连接所有容器

    Args:
        settings: 可选的配置实例，不提供时从环境变量读取

    Returns:
        Bootstrap 实例
    """
    config = ConfigContainer()
    if settings is not None:
        config.settings.override(providers.Object(settings))

    infra = InfraContainer(config=config)
    app = AppContainer(config=config, infra=infra)
    return Bootstrap(config=config, infra=infra, app=app)


__all__ = [
    "Bootstrap",
    "bootstrap",
    "ConfigContainer",
    "InfraContainer",
    "AppContainer",
]
