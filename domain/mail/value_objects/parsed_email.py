"""已收取邮件值对象"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from domain.common.base_value_object import BaseValueObject
from domain.mail.value_objects.email_content import EmailContent


@dataclass(frozen=True)
class ParsedEmail(BaseValueObject):
    """
    一封已收取并完成 MIME 解析的邮件

    通过 RemoteMailLoaded 交给调用方；收取服务本身不保留它。

    Attributes:
        message_id: Message-ID 头，缺失时为 "unknown-<标识>"
        from_address: 解码后的 From 头
        subject: 解码后的主题
        content: 正文
        to_addresses: To 头中的邮箱地址
        received_at: Date 头时间，无法解析时为解析时刻
    """

    message_id: str
    from_address: str
    subject: str
    content: EmailContent
    to_addresses: Tuple[str, ...] = field(default=())
    received_at: Optional[datetime] = None

    @property
    def body_text(self) -> Optional[str]:
        return self.content.text

    @property
    def body_html(self) -> Optional[str]:
        return self.content.html
