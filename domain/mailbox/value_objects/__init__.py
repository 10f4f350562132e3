"""邮箱值对象模块"""

from domain.mailbox.value_objects.mailbox_enums import EmailAccountType
from domain.mailbox.value_objects.email_account import (
    DEFAULT_MAILBOX,
    EmailAccount,
    resolve_hostname,
)

__all__ = [
    "EmailAccountType",
    "EmailAccount",
    "DEFAULT_MAILBOX",
    "resolve_hostname",
]
