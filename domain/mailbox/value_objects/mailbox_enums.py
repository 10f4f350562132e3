"""邮箱相关枚举类型"""

from enum import Enum


class EmailAccountType(str, Enum):
    """邮箱账号类型枚举"""

    DROP_FOLDER = "drop_folder"
    """本地投递目录（不支持远程收取）"""

    POP3 = "pop3"
    """POP3 收件箱"""

    IMAP = "imap"
    """IMAP 邮箱"""

    @property
    def is_remote(self) -> bool:
        """是否为远程邮件协议"""
        return self in (EmailAccountType.POP3, EmailAccountType.IMAP)
