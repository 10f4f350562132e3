"""邮件会话工厂实现"""

import imaplib
import logging
import poplib
from typing import Optional

from domain.common.exceptions import UnsupportedAccountTypeException
from domain.mailbox.value_objects.email_account import EmailAccount
from domain.mailbox.value_objects.mailbox_enums import EmailAccountType
from domain.mail.services.mail_session import (
    MailSession,
    MailSessionFactory,
    MailConnectionError,
    MailAuthenticationError,
)
from infrastructure.mail.parsing.mime_email_parser import MimeEmailParser
from infrastructure.mail.sessions.connection import (
    create_ssl_context,
    ensure_peer_certificate,
    quote_mailbox,
)
from infrastructure.mail.sessions.imaplib_session import ImaplibSession
from infrastructure.mail.sessions.poplib_session import PoplibSession


IMAP_ERROR = imaplib.IMAP4.error
POP3_ERROR = poplib.error_proto


class MailSessionFactoryImpl(MailSessionFactory):
    """
    邮件会话工厂实现

    使用标准库 imaplib / poplib 建立会话，支持：
    - SSL/TLS 或明文连接
    - IMAP 登录后以读写模式打开配置的邮箱
    - 端口未配置时使用协议默认端口
    - 建立失败时关闭半打开的连接
    """

    DEFAULT_TIMEOUT = 30  # 秒

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        parser: Optional[MimeEmailParser] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        初始化会话工厂

        Args:
            timeout: 传输层超时时间（秒）
            parser: 邮件解析器，默认新建 MimeEmailParser
            logger: 可选的日志记录器
        """
        self._timeout = timeout
        self._parser = parser or MimeEmailParser()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def timeout(self) -> float:
        """传输层超时时间（秒）"""
        return self._timeout

    def open(self, account: EmailAccount) -> MailSession:
        match account.account_type:
            case EmailAccountType.IMAP:
                return self._open_imap(account)
            case EmailAccountType.POP3:
                return self._open_pop3(account)
            case _:
                raise UnsupportedAccountTypeException(
                    account.account_type, operation="open_session"
                )

    def _open_imap(self, account: EmailAccount) -> ImaplibSession:
        """
        建立 IMAP 会话

        Raises:
            MailConnectionError: 连接失败或邮箱无法打开
            MailAuthenticationError: 认证失败
        """
        server = account.connection_host
        secure = account.enable_secure_protocol
        default_port = imaplib.IMAP4_SSL_PORT if secure else imaplib.IMAP4_PORT
        port = account.port or default_port

        try:
            self._logger.debug(f"Connecting to {server}:{port} (IMAP, ssl={secure})")
            if secure:
                imap = imaplib.IMAP4_SSL(
                    host=account.incoming_address,
                    port=port,
                    ssl_context=create_ssl_context(),
                    timeout=self._timeout,
                )
            else:
                imap = imaplib.IMAP4(
                    host=account.incoming_address,
                    port=port,
                    timeout=self._timeout,
                )
        except (OSError, IMAP_ERROR) as e:
            raise MailConnectionError(server=server, port=port, message=str(e)) from e

        try:
            if secure:
                ensure_peer_certificate(imap.sock, server, port)

            self._logger.debug(f"Authenticating as {account.username}")
            try:
                imap.login(account.username, account.password)
            except IMAP_ERROR as e:
                raise MailAuthenticationError(username=account.username, message=str(e)) from e

            mailbox = account.mailbox_name
            try:
                status, data = imap.select(quote_mailbox(mailbox), readonly=False)
            except IMAP_ERROR as e:
                raise MailConnectionError(
                    server=server, port=port, message=f"Failed to open {mailbox}: {e}"
                ) from e
            if status != "OK":
                raise MailConnectionError(
                    server=server, port=port, message=f"Failed to open {mailbox}: {data!r}"
                )
        except BaseException:
            self._abort_imap(imap)
            raise

        self._logger.info(f"Successfully connected to {server}:{port}, mailbox {mailbox}")
        return ImaplibSession(imap, parser=self._parser)

    def _open_pop3(self, account: EmailAccount) -> PoplibSession:
        """
        建立 POP3 会话

        Raises:
            MailConnectionError: 连接失败
            MailAuthenticationError: 认证失败
        """
        server = account.connection_host
        secure = account.enable_secure_protocol
        default_port = poplib.POP3_SSL_PORT if secure else poplib.POP3_PORT
        port = account.port or default_port

        try:
            self._logger.debug(f"Connecting to {server}:{port} (POP3, ssl={secure})")
            if secure:
                pop = poplib.POP3_SSL(
                    account.incoming_address,
                    port,
                    timeout=self._timeout,
                    context=create_ssl_context(),
                )
            else:
                pop = poplib.POP3(account.incoming_address, port, timeout=self._timeout)
        except (OSError, POP3_ERROR) as e:
            raise MailConnectionError(server=server, port=port, message=str(e)) from e

        try:
            if secure:
                ensure_peer_certificate(pop.sock, server, port)

            self._logger.debug(f"Authenticating as {account.username}")
            try:
                pop.user(account.username)
                pop.pass_(account.password)
            except POP3_ERROR as e:
                raise MailAuthenticationError(username=account.username, message=str(e)) from e
        except BaseException:
            self._abort_pop3(pop)
            raise

        self._logger.info(f"Successfully connected to {server}:{port}")
        return PoplibSession(pop, parser=self._parser)

    def _abort_imap(self, imap: imaplib.IMAP4) -> None:
        try:
            imap.logout()
        except (OSError, IMAP_ERROR) as e:
            self._logger.debug(f"Error during logout: {e}")

    def _abort_pop3(self, pop: poplib.POP3) -> None:
        try:
            pop.close()
        except OSError as e:
            self._logger.debug(f"Error during close: {e}")
