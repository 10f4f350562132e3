"""邮件值对象模块"""

from domain.mail.value_objects.email_content import EmailContent
from domain.mail.value_objects.parsed_email import ParsedEmail
from domain.mail.value_objects.message_identifiers import (
    ImapUid,
    Pop3Index,
    MessageIdentifier,
)
from domain.mail.value_objects.mail_reader_request import MailReaderRequest

__all__ = [
    "EmailContent",
    "ParsedEmail",
    "ImapUid",
    "Pop3Index",
    "MessageIdentifier",
    "MailReaderRequest",
]
