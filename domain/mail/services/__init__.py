"""邮件领域服务模块"""

from domain.mail.services.mail_session import (
    ImapSession,
    Pop3Session,
    MailSession,
    MailSessionFactory,
    MailConnectionError,
    MailAuthenticationError,
    MailProtocolError,
)

__all__ = [
    "ImapSession",
    "Pop3Session",
    "MailSession",
    "MailSessionFactory",
    "MailConnectionError",
    "MailAuthenticationError",
    "MailProtocolError",
]
