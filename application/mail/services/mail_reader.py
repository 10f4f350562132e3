"""远程邮件收取服务接口"""

import asyncio
from abc import ABC, abstractmethod
from typing import AsyncIterator, Callable, Optional

from domain.mailbox.value_objects.email_account import EmailAccount
from domain.mail.events.mail_events import MailReaderEvent
from domain.mail.value_objects.mail_reader_request import MailReaderRequest
from domain.mail.value_objects.parsed_email import ParsedEmail

MessageLoadedCallback = Callable[[EmailAccount, ParsedEmail], None]
MessageErrorCallback = Callable[[EmailAccount, str, Exception], None]


class MailReader(ABC):
    """
    远程邮件收取服务接口

    定义从 IMAP/POP3 邮箱收取邮件的契约，负责：
    - 按账号类型建立会话
    - 按从旧到新的顺序应用收取上限
    - 逐封收取，单封失败不影响整批
    - 可选的收取后自动删除
    - 任何退出路径上都释放会话
    """

    @abstractmethod
    async def load_from_server(
        self,
        request: MailReaderRequest,
        cancel_event: Optional[asyncio.Event] = None,
        *,
        on_message_loaded: Optional[MessageLoadedCallback] = None,
        on_load_error: Optional[MessageErrorCallback] = None,
        on_delete_error: Optional[MessageErrorCallback] = None,
    ) -> None:
        """
        收取邮件并通过回调报告每封邮件的结果

        回调在收取循环中同步调用，不能长时间阻塞。

        Args:
            request: 收取请求
            cancel_event: 可选的取消信号
            on_message_loaded: 收取成功回调 (account, message)
            on_load_error: 收取失败回调 (account, id, exception)
            on_delete_error: 删除失败回调 (account, id, exception)

        Raises:
            InvalidOperationException: 请求不满足前置条件
            MailConnectionError: 连接或打开邮箱失败
            MailAuthenticationError: 认证失败
            asyncio.CancelledError: 收取被取消
        """
        raise NotImplementedError

    @abstractmethod
    def iter_from_server(
        self,
        request: MailReaderRequest,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> AsyncIterator[MailReaderEvent]:
        """
        以异步迭代器的形式逐封产生收取结果

        迭代器不可恢复，重新收取需要再次调用。提前结束迭代时应使用
        contextlib.aclosing() 以确保会话被释放。

        Args:
            request: 收取请求
            cancel_event: 可选的取消信号

        Returns:
            RemoteMailLoaded / LoadMailError / DeleteMailError 事件的异步迭代器
        """
        raise NotImplementedError
