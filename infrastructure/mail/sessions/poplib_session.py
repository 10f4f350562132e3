"""基于 poplib 的 POP3 会话实现"""

import logging
import poplib
from typing import Optional

from domain.mail.services.mail_session import Pop3Session
from domain.mail.value_objects.message_identifiers import Pop3Index
from domain.mail.value_objects.parsed_email import ParsedEmail
from infrastructure.mail.parsing.mime_email_parser import MimeEmailParser
from infrastructure.mail.sessions.connection import shutdown_socket


class PoplibSession(Pop3Session):
    """
    POP3 会话实现

    Pop3Index 从 0 开始，转换为协议消息编号（从 1 开始）后再发送命令。
    DELE 标记的邮件在 QUIT 后才被服务器真正删除。
    """

    def __init__(
        self,
        pop: poplib.POP3,
        parser: Optional[MimeEmailParser] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._pop = pop
        self._parser = parser or MimeEmailParser()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def connection(self) -> poplib.POP3:
        """底层 poplib 连接"""
        return self._pop

    def message_count(self) -> int:
        count, _size = self._pop.stat()
        self._logger.debug(f"STAT returned {count} message(s)")
        return count

    def fetch(self, index: Pop3Index) -> ParsedEmail:
        _response, lines, _octets = self._pop.retr(index.message_number)
        return self._parser.parse(b"\r\n".join(lines), fallback_id=str(index))

    def delete(self, index: Pop3Index) -> None:
        self._pop.dele(index.message_number)

    def close(self) -> None:
        """发送 QUIT 提交删除并断开连接，失败只记录日志"""
        try:
            self._pop.quit()
        except (OSError, poplib.error_proto) as e:
            self._logger.debug(f"Error during quit: {e}")
            try:
                self._pop.close()
            except OSError as e:
                self._logger.debug(f"Error during socket close: {e}")

    def abort(self) -> None:
        shutdown_socket(getattr(self._pop, "sock", None), self._logger)
