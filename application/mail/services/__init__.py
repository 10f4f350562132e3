"""邮件应用服务"""

from application.mail.services.mail_reader import MailReader
from application.mail.services.mail_reader_service import MailReaderService

__all__ = ["MailReader", "MailReaderService"]
