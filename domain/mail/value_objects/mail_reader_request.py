"""邮件收取请求值对象"""

from dataclasses import dataclass
from typing import Optional, Sequence, List, TypeVar

from domain.common.base_value_object import BaseValueObject
from domain.common.exceptions import InvalidValueObjectException
from domain.mailbox.value_objects.email_account import EmailAccount

T = TypeVar("T")


@dataclass(frozen=True)
class MailReaderRequest(BaseValueObject):
    """
    邮件收取请求

    每次收取一个实例，收取结束后丢弃。

    Attributes:
        account: 要连接的邮箱账号
        do_auto_delete: 收取成功后是否自动删除邮件
        limit_total_fetching: 单次收取的邮件数上限，None 表示不限制；
            超出上限时优先收取最早的邮件
    """

    account: Optional[EmailAccount]
    do_auto_delete: bool = False
    limit_total_fetching: Optional[int] = None

    def validate(self) -> None:
        """验证收取上限"""
        if self.limit_total_fetching is not None and self.limit_total_fetching < 0:
            raise InvalidValueObjectException(
                value_object_type="MailReaderRequest",
                value=self.limit_total_fetching,
                reason="Fetch limit cannot be negative",
            )

    @property
    def has_limit(self) -> bool:
        """是否设置了收取上限"""
        return self.limit_total_fetching is not None

    def apply_limit(self, identifiers: Sequence[T]) -> List[T]:
        """
        按收取上限截取标识列表

        保持输入顺序，只保留前 limit 个，不做任何排序。

        Args:
            identifiers: 按从旧到新排列的邮件标识

        Returns:
            截取后的标识列表
        """
        if self.limit_total_fetching is not None and len(identifiers) > self.limit_total_fetching:
            return list(identifiers[: self.limit_total_fetching])
        return list(identifiers)
