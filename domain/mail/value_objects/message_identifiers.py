"""邮件标识值对象

每种协议有自己的标识类型，标识不跨协议使用。
"""

from dataclasses import dataclass
from typing import Union

from domain.common.base_value_object import BaseValueObject
from domain.common.exceptions import InvalidValueObjectException


@dataclass(frozen=True)
class ImapUid(BaseValueObject):
    """
    IMAP 邮件 UID

    邮箱内稳定且唯一，按分配顺序递增。
    """

    value: int

    def validate(self) -> None:
        if self.value < 1:
            raise InvalidValueObjectException(
                value_object_type="ImapUid",
                value=self.value,
                reason="IMAP UID must be a positive integer",
            )

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Pop3Index(BaseValueObject):
    """
    POP3 邮件序号

    从 0 开始，仅在当前会话内有效。协议层的消息编号为 value + 1。
    """

    value: int

    def validate(self) -> None:
        if self.value < 0:
            raise InvalidValueObjectException(
                value_object_type="Pop3Index",
                value=self.value,
                reason="POP3 index cannot be negative",
            )

    @property
    def message_number(self) -> int:
        """POP3 协议中的消息编号（从 1 开始）"""
        return self.value + 1

    def __str__(self) -> str:
        return str(self.value)


MessageIdentifier = Union[ImapUid, Pop3Index]
