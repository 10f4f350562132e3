"""MIME 邮件解析器"""

import email
import logging
from datetime import datetime, timezone
from email.header import decode_header
from email.message import Message
from email.utils import getaddresses, parsedate_to_datetime
from typing import Optional, Tuple

from domain.mail.value_objects.parsed_email import ParsedEmail
from domain.mail.value_objects.email_content import EmailContent


class MimeEmailParser:
    """
    MIME 邮件解析器

    使用标准库 email 将原始 RFC 822 字节解析为 ParsedEmail，支持：
    - RFC 2047 编码头部解码
    - 发件人/收件人地址提取
    - 纯文本和 HTML 正文提取（跳过附件）
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)

    def parse(self, raw_email: bytes, fallback_id: str = "") -> ParsedEmail:
        """
        解析原始邮件

        Args:
            raw_email: 原始邮件字节
            fallback_id: 缺少 Message-ID 时使用的标识

        Returns:
            解析后的邮件
        """
        msg = email.message_from_bytes(raw_email)

        message_id = msg.get("Message-ID", "")
        if not message_id:
            message_id = f"unknown-{fallback_id}"

        body_text, body_html = self._extract_body(msg)

        return ParsedEmail(
            message_id=message_id,
            from_address=self._decode_header_value(msg.get("From", "")),
            subject=self._decode_header_value(msg.get("Subject", "")),
            content=EmailContent.from_parts(body_text, body_html),
            to_addresses=self._extract_addresses(msg, "To"),
            received_at=self._parse_date(msg.get("Date")),
        )

    def _decode_header_value(self, value: Optional[str]) -> str:
        """
        解码邮件头部值（处理编码）

        Args:
            value: 原始头部值

        Returns:
            解码后的字符串
        """
        if not value:
            return ""

        result_parts = []
        for part, charset in decode_header(str(value)):
            if isinstance(part, bytes):
                try:
                    decoded = part.decode(charset or "utf-8", errors="replace")
                except (LookupError, UnicodeDecodeError):
                    decoded = part.decode("utf-8", errors="replace")
                result_parts.append(decoded)
            else:
                result_parts.append(part)

        return "".join(result_parts)

    def _extract_addresses(self, msg: Message, header: str) -> Tuple[str, ...]:
        """提取地址类头部中的邮箱地址"""
        values = [self._decode_header_value(v) for v in msg.get_all(header, [])]
        return tuple(addr for _, addr in getaddresses(values) if addr)

    def _parse_date(self, date_str: Optional[str]) -> datetime:
        """
        解析邮件日期，缺失或无法解析时返回当前时间

        Args:
            date_str: 日期字符串

        Returns:
            datetime 对象
        """
        if not date_str:
            return datetime.now(timezone.utc)

        try:
            return parsedate_to_datetime(date_str)
        except (TypeError, ValueError):
            self._logger.debug(f"Unparseable Date header: {date_str!r}")
            return datetime.now(timezone.utc)

    def _extract_body(self, msg: Message) -> Tuple[Optional[str], Optional[str]]:
        """
        提取邮件正文（纯文本和 HTML）

        Args:
            msg: 邮件消息对象

        Returns:
            (纯文本正文, HTML 正文) 元组
        """
        body_text: Optional[str] = None
        body_html: Optional[str] = None

        parts = msg.walk() if msg.is_multipart() else [msg]
        for part in parts:
            if part.is_multipart():
                continue

            # 跳过附件
            if "attachment" in str(part.get("Content-Disposition", "")):
                continue

            content_type = part.get_content_type()
            if content_type not in ("text/plain", "text/html"):
                continue

            payload = part.get_payload(decode=True)
            if payload is None:
                continue

            decoded_content = self._decode_payload(payload, part.get_content_charset())

            if content_type == "text/plain" and body_text is None:
                body_text = decoded_content
            elif content_type == "text/html" and body_html is None:
                body_html = decoded_content

        return body_text, body_html

    @staticmethod
    def _decode_payload(payload: bytes, charset: Optional[str]) -> str:
        try:
            return payload.decode(charset or "utf-8", errors="replace")
        except (LookupError, UnicodeDecodeError):
            return payload.decode("utf-8", errors="replace")
