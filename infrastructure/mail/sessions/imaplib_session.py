"""基于 imaplib 的 IMAP 会话实现"""

import imaplib
import logging
from typing import Any, List, Optional

from domain.mail.services.mail_session import ImapSession, MailProtocolError
from domain.mail.value_objects.message_identifiers import ImapUid
from domain.mail.value_objects.parsed_email import ParsedEmail
from infrastructure.mail.parsing.mime_email_parser import MimeEmailParser
from infrastructure.mail.sessions.connection import shutdown_socket


class ImaplibSession(ImapSession):
    """
    IMAP 会话实现

    包装一个已登录并选中邮箱的 imaplib 连接，所有邮件操作都使用 UID 命令。
    """

    def __init__(
        self,
        imap: imaplib.IMAP4,
        parser: Optional[MimeEmailParser] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._imap = imap
        self._parser = parser or MimeEmailParser()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def connection(self) -> imaplib.IMAP4:
        """底层 imaplib 连接"""
        return self._imap

    def search_all(self) -> List[ImapUid]:
        status, data = self._imap.uid("SEARCH", None, "ALL")
        self._check(status, data, "UID SEARCH")

        raw = data[0] if data else b""
        uids = [ImapUid(int(value)) for value in (raw or b"").split()]
        self._logger.debug(f"UID SEARCH ALL returned {len(uids)} message(s)")
        return uids

    def fetch(self, uid: ImapUid) -> ParsedEmail:
        status, data = self._imap.uid("FETCH", str(uid), "(RFC822)")
        self._check(status, data, "UID FETCH")

        raw_email = self._extract_literal(data)
        if raw_email is None:
            raise MailProtocolError(f"UID FETCH {uid}", data)

        return self._parser.parse(raw_email, fallback_id=str(uid))

    def delete(self, uid: ImapUid) -> None:
        status, data = self._imap.uid("STORE", str(uid), "+FLAGS", "(\\Deleted)")
        self._check(status, data, "UID STORE")

        status, data = self._imap.expunge()
        self._check(status, data, "EXPUNGE")

    def close(self) -> None:
        """
        关闭邮箱并注销

        close() 只能在 SELECTED 状态下调用；任何一步失败都只记录日志。
        """
        try:
            if self._imap.state == "SELECTED":
                self._imap.close()
        except (OSError, imaplib.IMAP4.error) as e:
            self._logger.debug(f"Error during close: {e}")

        try:
            self._imap.logout()
        except (OSError, imaplib.IMAP4.error) as e:
            self._logger.debug(f"Error during logout: {e}")

    def abort(self) -> None:
        shutdown_socket(getattr(self._imap, "sock", None), self._logger)

    @staticmethod
    def _check(status: str, data: Any, command: str) -> None:
        if status != "OK":
            raise MailProtocolError(command, data)

    @staticmethod
    def _extract_literal(data: Any) -> Optional[bytes]:
        """从 FETCH 响应中取出 RFC822 字面量"""
        for item in data or []:
            if isinstance(item, tuple) and len(item) > 1 and isinstance(item[1], bytes):
                return item[1]
        return None
