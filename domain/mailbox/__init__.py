"""
邮箱账号界限上下文

提供远程邮箱账号的领域模型，包括：
- EmailAccount 值对象
- EmailAccountType 枚举
"""

from domain.mailbox.value_objects.mailbox_enums import EmailAccountType
from domain.mailbox.value_objects.email_account import EmailAccount

__all__ = [
    "EmailAccount",
    "EmailAccountType",
]
