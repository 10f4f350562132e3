"""EmailAccount 值对象测试"""

import pytest

from domain.common.exceptions import InvalidValueObjectException
from domain.mailbox.value_objects.email_account import EmailAccount, resolve_hostname
from domain.mailbox.value_objects.mailbox_enums import EmailAccountType


class TestResolveHostname:
    """主机名解析测试"""

    @pytest.mark.parametrize("address", ["imap.example.com", "192.168.1.10", "localhost"])
    def test_names_and_ipv4_unchanged(self, address):
        """测试域名和 IPv4 地址原样返回"""
        assert resolve_hostname(address) == address

    @pytest.mark.parametrize(
        "address, expected",
        [("::1", "[::1]"), ("fe80::1", "[fe80::1]"), ("2001:db8::25", "[2001:db8::25]")],
    )
    def test_ipv6_literal_bracketed(self, address, expected):
        """测试 IPv6 字面量加方括号"""
        assert resolve_hostname(address) == expected


class TestEmailAccountType:
    """账号类型枚举测试"""

    def test_remote_types(self):
        """测试远程类型判断"""
        assert EmailAccountType.IMAP.is_remote
        assert EmailAccountType.POP3.is_remote
        assert not EmailAccountType.DROP_FOLDER.is_remote

    def test_value_lookup(self):
        """测试按值查找"""
        assert EmailAccountType("pop3") is EmailAccountType.POP3


class TestEmailAccount:
    """EmailAccount 测试"""

    def test_defaults(self):
        """测试默认值"""
        account = EmailAccount(username="user", incoming_address="imap.example.com")

        assert account.account_type == EmailAccountType.IMAP
        assert account.mailbox == "INBOX"
        assert account.port == 0
        assert account.enable_secure_protocol is True

    def test_empty_mailbox_falls_back_to_inbox(self):
        """测试空邮箱名回退到 INBOX"""
        account = EmailAccount(username="user", mailbox="")

        assert account.mailbox_name == "INBOX"

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_invalid_port_raises(self, port):
        """测试非法端口抛出异常"""
        with pytest.raises(InvalidValueObjectException) as exc_info:
            EmailAccount(username="user", port=port)

        assert "Invalid port number" in exc_info.value.message

    def test_invalid_account_type_raises(self):
        """测试未知账号类型抛出异常"""
        with pytest.raises(InvalidValueObjectException):
            EmailAccount(account_type="smtp", username="user")  # type: ignore[arg-type]

    def test_repr_hides_password(self):
        """测试 repr 不暴露密码"""
        account = EmailAccount(username="user", password="s3cret")

        assert "s3cret" not in repr(account)

    def test_connection_string(self):
        """测试连接字符串"""
        imaps = EmailAccount(incoming_address="imap.example.com", port=993)
        pop3 = EmailAccount(
            account_type=EmailAccountType.POP3,
            incoming_address="::1",
            port=110,
            enable_secure_protocol=False,
        )

        assert imaps.connection_string == "imaps://imap.example.com:993"
        assert pop3.connection_string == "pop3://[::1]:110"

    def test_display_name_prefers_alias(self):
        """测试显示名称优先使用别名"""
        assert EmailAccount(email="a@example.com", alias="Support").display_name == "Support"
        assert EmailAccount(email="a@example.com").display_name == "a@example.com"
        assert EmailAccount(username="login").display_name == "login"

    def test_immutability(self):
        """测试值对象不可变性"""
        account = EmailAccount(username="user")

        with pytest.raises(Exception):  # FrozenInstanceError
            account.username = "other"

    def test_equality(self):
        """测试值对象相等性"""
        assert EmailAccount(username="user", port=993) == EmailAccount(username="user", port=993)
        assert EmailAccount(username="user", port=993) != EmailAccount(username="user", port=995)
