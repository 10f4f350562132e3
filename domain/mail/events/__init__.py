"""邮件领域事件"""

from domain.mail.events.mail_events import (
    RemoteMailLoaded,
    LoadMailError,
    DeleteMailError,
    MailReaderEvent,
)

__all__ = [
    "RemoteMailLoaded",
    "LoadMailError",
    "DeleteMailError",
    "MailReaderEvent",
]
