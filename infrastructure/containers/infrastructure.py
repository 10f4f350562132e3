"""
基础设施容器（InfraContainer）

管理邮件协议相关的基础设施组件：MIME 解析器、会话工厂。
依赖 ConfigContainer 获取配置。
"""

from dependency_injector import containers, providers

from infrastructure.mail.parsing.mime_email_parser import MimeEmailParser
from infrastructure.mail.sessions.mail_session_factory_impl import MailSessionFactoryImpl


class InfraContainer(containers.DeclarativeContainer):
    """基础设施容器 - 管理技术实现"""

    # 依赖配置容器
    config = providers.DependenciesContainer()

    # ============ 邮件解析 ============

    # MIME 邮件解析器（无状态，单例）
    mime_email_parser = providers.Singleton(MimeEmailParser)

    # ============ 邮件会话 ============

    # IMAP/POP3 会话工厂
    mail_session_factory = providers.Singleton(
        MailSessionFactoryImpl,
        timeout=config.settings.provided.mail_timeout,
        parser=mime_email_parser,
    )
