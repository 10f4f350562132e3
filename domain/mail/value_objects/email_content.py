"""邮件正文值对象"""

from dataclasses import dataclass
from typing import Optional

from domain.common.base_value_object import BaseValueObject


@dataclass(frozen=True)
class EmailContent(BaseValueObject):
    """
    邮件正文

    保存 MIME 中第一个非附件的 text/plain 与 text/html 部分，缺失的部分为 None。

    Attributes:
        text: 纯文本正文
        html: HTML 正文
    """

    text: Optional[str] = None
    html: Optional[str] = None

    @classmethod
    def from_parts(cls, text: Optional[str], html: Optional[str]) -> "EmailContent":
        """由解析出的正文构造，空字符串按缺失处理"""
        return cls(text=text or None, html=html or None)

    @property
    def is_empty(self) -> bool:
        return self.text is None and self.html is None

    def preview(self, length: int = 80) -> str:
        """
        正文摘要，用于日志

        优先取纯文本，其次 HTML；空白折叠为单个空格。

        Args:
            length: 最大字符数

        Returns:
            截断后的单行摘要
        """
        body = self.text if self.text is not None else (self.html or "")
        collapsed = " ".join(body.split())
        if len(collapsed) <= length:
            return collapsed
        return collapsed[: max(length - 3, 0)] + "..."
