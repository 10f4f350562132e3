"""邮件收取通知事件

由 MailReaderService 在收取循环中按顺序产生，调用方既可以通过回调接收，
也可以直接迭代 MailReaderService.iter_from_server() 的结果。

使用示例（应用层）:
    async for event in reader.iter_from_server(request):
        match event:
            case RemoteMailLoaded(mail_message=message):
                store(message)
            case LoadMailError(id=message_id, exception=error):
                logger.warning(f"Failed to load {message_id}: {error}")
"""

from dataclasses import dataclass
from typing import Union

from domain.common.base_event import DomainEvent
from domain.mailbox.value_objects.email_account import EmailAccount
from domain.mail.value_objects.parsed_email import ParsedEmail


@dataclass(frozen=True)
class RemoteMailLoaded(DomainEvent):
    """
    邮件收取成功事件

    Attributes:
        account: 邮件所属账号
        mail_message: 解析后的邮件
    """

    account: EmailAccount
    mail_message: ParsedEmail


@dataclass(frozen=True)
class LoadMailError(DomainEvent):
    """
    邮件收取失败事件

    单封邮件收取失败不会中断本次收取。

    Attributes:
        account: 邮件所属账号
        id: 邮件标识文本（POP3 为序号，IMAP 为 UID）
        exception: 触发失败的异常
    """

    account: EmailAccount
    id: str
    exception: Exception


@dataclass(frozen=True)
class DeleteMailError(DomainEvent):
    """
    邮件删除失败事件

    邮件仍视为已收取，不会重试删除。

    Attributes:
        account: 邮件所属账号
        id: 邮件标识文本
        exception: 触发失败的异常
    """

    account: EmailAccount
    id: str
    exception: Exception


MailReaderEvent = Union[RemoteMailLoaded, LoadMailError, DeleteMailError]
