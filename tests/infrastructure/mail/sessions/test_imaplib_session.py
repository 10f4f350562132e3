"""ImaplibSession 单元测试"""

import imaplib
import socket
from unittest.mock import MagicMock, call

import pytest

from domain.mail.services.mail_session import ImapSession, MailProtocolError
from domain.mail.value_objects.message_identifiers import ImapUid
from infrastructure.mail.sessions.imaplib_session import ImaplibSession

RAW_EMAIL = b"""From: sender@example.com
To: test@example.com
Subject: Subject for-1
Message-ID: <1@example.com>
Date: Mon, 16 Dec 2024 10:00:00 +0000

Body
"""


@pytest.fixture
def mock_imap():
    imap = MagicMock()
    imap.state = "SELECTED"
    return imap


class TestImaplibSessionSearch:
    """搜索测试"""

    def test_is_imap_session(self, mock_imap):
        """测试实现 ImapSession 接口"""
        assert isinstance(ImaplibSession(mock_imap), ImapSession)

    def test_search_all_returns_uids_in_server_order(self, mock_imap):
        """测试按服务器返回顺序返回 UID"""
        mock_imap.uid.return_value = ("OK", [b"3 7 12"])

        result = ImaplibSession(mock_imap).search_all()

        assert result == [ImapUid(3), ImapUid(7), ImapUid(12)]
        mock_imap.uid.assert_called_once_with("SEARCH", None, "ALL")

    def test_search_all_empty_mailbox(self, mock_imap):
        """测试空邮箱"""
        mock_imap.uid.return_value = ("OK", [b""])

        assert ImaplibSession(mock_imap).search_all() == []

    def test_search_failure_raises(self, mock_imap):
        """测试搜索失败抛出协议异常"""
        mock_imap.uid.return_value = ("NO", [b"search failed"])

        with pytest.raises(MailProtocolError) as exc_info:
            ImaplibSession(mock_imap).search_all()

        assert "UID SEARCH" in str(exc_info.value)


class TestImaplibSessionFetch:
    """收取测试"""

    def test_fetch_parses_message(self, mock_imap):
        """测试收取并解析邮件"""
        mock_imap.uid.return_value = ("OK", [(b"7 (UID 7 RFC822 {123}", RAW_EMAIL), b")"])

        result = ImaplibSession(mock_imap).fetch(ImapUid(7))

        assert result.subject == "Subject for-1"
        assert result.to_addresses == ("test@example.com",)
        mock_imap.uid.assert_called_once_with("FETCH", "7", "(RFC822)")

    def test_fetch_missing_message_raises(self, mock_imap):
        """测试邮件不存在时抛出协议异常"""
        mock_imap.uid.return_value = ("OK", [None])

        with pytest.raises(MailProtocolError):
            ImaplibSession(mock_imap).fetch(ImapUid(7))

    def test_fetch_non_ok_raises(self, mock_imap):
        """测试 FETCH 返回非 OK 时抛出协议异常"""
        mock_imap.uid.return_value = ("NO", [b"fetch failed"])

        with pytest.raises(MailProtocolError):
            ImaplibSession(mock_imap).fetch(ImapUid(7))


class TestImaplibSessionDelete:
    """删除测试"""

    def test_delete_flags_and_expunges(self, mock_imap):
        """测试标记删除并清除"""
        mock_imap.uid.return_value = ("OK", [b""])
        mock_imap.expunge.return_value = ("OK", [b"7"])

        ImaplibSession(mock_imap).delete(ImapUid(7))

        mock_imap.uid.assert_called_once_with("STORE", "7", "+FLAGS", "(\\Deleted)")
        mock_imap.expunge.assert_called_once()

    def test_store_failure_skips_expunge(self, mock_imap):
        """测试标记失败时不执行清除"""
        mock_imap.uid.return_value = ("NO", [b"read-only"])

        with pytest.raises(MailProtocolError):
            ImaplibSession(mock_imap).delete(ImapUid(7))

        mock_imap.expunge.assert_not_called()

    def test_expunge_failure_raises(self, mock_imap):
        """测试清除失败抛出协议异常"""
        mock_imap.uid.return_value = ("OK", [b""])
        mock_imap.expunge.return_value = ("NO", [b"expunge failed"])

        with pytest.raises(MailProtocolError) as exc_info:
            ImaplibSession(mock_imap).delete(ImapUid(7))

        assert "EXPUNGE" in str(exc_info.value)


class TestImaplibSessionClose:
    """断开连接测试"""

    def test_close_selected_mailbox_then_logout(self, mock_imap):
        """测试 SELECTED 状态下先 CLOSE 再 LOGOUT"""
        ImaplibSession(mock_imap).close()

        assert mock_imap.method_calls[-2:] == [call.close(), call.logout()]

    def test_close_skipped_when_not_selected(self, mock_imap):
        """测试未选中邮箱时只 LOGOUT"""
        mock_imap.state = "AUTH"

        ImaplibSession(mock_imap).close()

        mock_imap.close.assert_not_called()
        mock_imap.logout.assert_called_once()

    def test_close_errors_are_not_raised(self, mock_imap):
        """测试断开连接时的错误不抛出"""
        mock_imap.close.side_effect = imaplib.IMAP4.abort("socket error")
        mock_imap.logout.side_effect = OSError("broken pipe")

        ImaplibSession(mock_imap).close()

        mock_imap.logout.assert_called_once()

    def test_abort_shuts_down_socket(self, mock_imap):
        """测试中断时关闭 socket 读写"""
        ImaplibSession(mock_imap).abort()

        mock_imap.sock.shutdown.assert_called_once_with(socket.SHUT_RDWR)
        mock_imap.logout.assert_not_called()

    def test_abort_errors_are_not_raised(self, mock_imap):
        """测试连接已断开时中断不抛出"""
        mock_imap.sock.shutdown.side_effect = OSError("not connected")

        ImaplibSession(mock_imap).abort()
