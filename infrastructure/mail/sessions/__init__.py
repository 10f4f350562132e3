"""邮件协议会话实现"""

from infrastructure.mail.sessions.imaplib_session import ImaplibSession
from infrastructure.mail.sessions.poplib_session import PoplibSession
from infrastructure.mail.sessions.mail_session_factory_impl import MailSessionFactoryImpl

__all__ = [
    "ImaplibSession",
    "PoplibSession",
    "MailSessionFactoryImpl",
]
