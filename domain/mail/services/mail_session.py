"""邮件协议会话接口

会话是已连接并通过认证的协议句柄，只在一次收取内有效。
IMAP 和 POP3 各自定义接口，使用方通过 match 区分两种会话：

    match session:
        case ImapSession():
            ids = session.search_all()
        case Pop3Session():
            ids = [Pop3Index(i) for i in range(session.message_count())]
"""

from abc import ABC, abstractmethod
from typing import List, Union

from domain.mailbox.value_objects.email_account import EmailAccount
from domain.mail.value_objects.message_identifiers import ImapUid, Pop3Index
from domain.mail.value_objects.parsed_email import ParsedEmail


class ImapSession(ABC):
    """
    IMAP 会话接口

    会话创建时已选中配置的邮箱（读写模式），可以在同一会话内删除邮件。
    """

    @abstractmethod
    def search_all(self) -> List[ImapUid]:
        """
        搜索当前邮箱中的全部邮件

        Returns:
            按服务器返回顺序（UID 升序，最早的在前）排列的 UID 列表
        """
        raise NotImplementedError

    @abstractmethod
    def fetch(self, uid: ImapUid) -> ParsedEmail:
        """
        获取并解析单封邮件

        Args:
            uid: 邮件 UID

        Returns:
            解析后的邮件
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, uid: ImapUid) -> None:
        """
        标记删除并清除单封邮件

        Args:
            uid: 邮件 UID
        """
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """关闭邮箱并注销（CLOSE + LOGOUT），不抛出异常"""
        raise NotImplementedError

    @abstractmethod
    def abort(self) -> None:
        """
        中断正在进行的网络调用

        可以在其他线程中调用，只关闭底层 socket 的读写，不抛出异常。
        阻塞中的调用随后以异常结束，之后仍需调用 close()。
        """
        raise NotImplementedError


class Pop3Session(ABC):
    """POP3 会话接口"""

    @abstractmethod
    def message_count(self) -> int:
        """
        获取收件箱中的邮件数量

        Returns:
            邮件数量
        """
        raise NotImplementedError

    @abstractmethod
    def fetch(self, index: Pop3Index) -> ParsedEmail:
        """
        获取并解析单封邮件

        Args:
            index: 邮件序号（从 0 开始）

        Returns:
            解析后的邮件
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, index: Pop3Index) -> None:
        """
        标记删除单封邮件，QUIT 时生效

        Args:
            index: 邮件序号（从 0 开始）
        """
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """发送 QUIT 并断开连接，不抛出异常"""
        raise NotImplementedError

    @abstractmethod
    def abort(self) -> None:
        """中断正在进行的网络调用，语义同 ImapSession.abort()"""
        raise NotImplementedError


MailSession = Union[ImapSession, Pop3Session]


class MailSessionFactory(ABC):
    """
    邮件会话工厂接口

    负责连接、认证，IMAP 还需以读写模式打开邮箱。
    具体实现在基础设施层。
    """

    @abstractmethod
    def open(self, account: EmailAccount) -> MailSession:
        """
        为账号打开一个会话

        Args:
            account: 远程邮箱账号（POP3 或 IMAP）

        Returns:
            ImapSession 或 Pop3Session

        Raises:
            MailConnectionError: 连接或打开邮箱失败
            MailAuthenticationError: 认证失败
        """
        raise NotImplementedError


class MailConnectionError(Exception):
    """邮件服务器连接错误"""

    def __init__(self, server: str, port: int, message: str):
        self.server = server
        self.port = port
        super().__init__(f"Failed to connect to {server}:{port} - {message}")


class MailAuthenticationError(Exception):
    """邮件服务器认证错误"""

    def __init__(self, username: str, message: str):
        self.username = username
        super().__init__(f"Authentication failed for {username} - {message}")


class MailProtocolError(Exception):
    """服务器返回了非预期的协议响应"""

    def __init__(self, command: str, response: object):
        self.command = command
        self.response = response
        super().__init__(f"{command} failed: {response!r}")
