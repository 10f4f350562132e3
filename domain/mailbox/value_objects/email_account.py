"""邮箱账号值对象"""

import ipaddress
from dataclasses import dataclass, field

from domain.common.base_value_object import BaseValueObject
from domain.common.exceptions import InvalidValueObjectException
from domain.mailbox.value_objects.mailbox_enums import EmailAccountType

DEFAULT_MAILBOX = "INBOX"


def resolve_hostname(address: str) -> str:
    """
    计算连接使用的主机名

    非 IPv4 的数字地址（即 IPv6 字面量）需要用方括号包裹，
    其余地址（域名、IPv4）原样返回。

    Args:
        address: 配置的服务器地址

    Returns:
        连接主机名
    """
    try:
        parsed = ipaddress.ip_address(address)
    except ValueError:
        return address
    if parsed.version == 4:
        return address
    return f"[{address}]"


@dataclass(frozen=True)
class EmailAccount(BaseValueObject):
    """
    邮箱账号值对象

    描述如何连接远程邮箱并进行身份验证。由调用方构造，收取过程中只读。

    Attributes:
        account_type: 账号类型（drop_folder, pop3, imap）
        email: 邮箱地址
        username: 登录用户名
        password: 登录密码（明文）
        incoming_address: 收件服务器地址（POP3/IMAP）
        port: 收件服务器端口，0 表示未设置
        enable_secure_protocol: 是否使用 SSL/TLS 加密连接
        mailbox: IMAP 邮箱名称，默认 INBOX
        alias: 显示别名
    """

    account_type: EmailAccountType = EmailAccountType.IMAP
    email: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    incoming_address: str = ""
    port: int = 0
    enable_secure_protocol: bool = True
    mailbox: str = DEFAULT_MAILBOX
    alias: str = ""

    def validate(self) -> None:
        """验证账号配置的有效性"""
        if not isinstance(self.account_type, EmailAccountType):
            raise InvalidValueObjectException(
                value_object_type="EmailAccount",
                value=self.account_type,
                reason=f"Unknown account type: {self.account_type}",
            )

        if not 0 <= self.port <= 65535:
            raise InvalidValueObjectException(
                value_object_type="EmailAccount",
                value=self.port,
                reason=f"Invalid port number: {self.port}. Must be between 0 and 65535",
            )

    @property
    def is_remote(self) -> bool:
        """是否为远程邮箱（POP3/IMAP）"""
        return self.account_type.is_remote

    @property
    def mailbox_name(self) -> str:
        """IMAP 邮箱名称，未配置时为 INBOX"""
        return self.mailbox or DEFAULT_MAILBOX

    @property
    def connection_host(self) -> str:
        """连接主机名（IPv6 字面量带方括号）"""
        return resolve_hostname(self.incoming_address)

    @property
    def display_name(self) -> str:
        """日志中使用的账号名称"""
        return self.alias or self.email or self.username

    @property
    def connection_string(self) -> str:
        """返回连接字符串格式"""
        protocol = self.account_type.value
        if self.enable_secure_protocol and self.is_remote:
            protocol += "s"
        return f"{protocol}://{self.connection_host}:{self.port}"
