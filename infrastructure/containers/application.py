"""
应用容器（AppContainer）

管理应用层服务，依赖 InfraContainer 获取基础设施。
"""

from typing import TYPE_CHECKING
from dependency_injector import containers, providers

from application.mail.services.mail_reader_service import MailReaderService

if TYPE_CHECKING:
    from .infrastructure import InfraContainer


class AppContainer(containers.DeclarativeContainer):
    """应用容器 - 管理应用层服务"""

    # 依赖配置容器
    config = providers.DependenciesContainer()

    # 依赖基础设施容器
    infra = providers.DependenciesContainer()

    # ============ 应用服务 ============

    # 邮件收取服务（无状态，每次收取独立建立会话）
    mail_reader_service = providers.Singleton(
        MailReaderService,
        session_factory=infra.mail_session_factory,
    )
