"""MimeEmailParser 单元测试"""

from datetime import datetime

from infrastructure.mail.parsing.mime_email_parser import MimeEmailParser


def create_mock_email_data(
    message_id: str = "<test@example.com>",
    from_address: str = "sender@example.com",
    to_address: str = "recipient@example.com",
    subject: str = "Test Subject",
    body_text: str = "Test body content",
) -> bytes:
    """创建模拟的原始邮件数据"""
    email_content = f"""From: {from_address}
To: {to_address}
Subject: {subject}
Message-ID: {message_id}
Date: Mon, 16 Dec 2024 10:00:00 +0000
Content-Type: text/plain; charset="utf-8"

{body_text}
"""
    return email_content.encode("utf-8")


MULTIPART_EMAIL = b"""From: "Sender Name" <sender@example.com>
To: first@example.com, "Second" <second@example.com>
Subject: Multipart
Message-ID: <multi@example.com>
Date: Mon, 16 Dec 2024 10:00:00 +0000
MIME-Version: 1.0
Content-Type: multipart/mixed; boundary="BOUNDARY"

--BOUNDARY
Content-Type: multipart/alternative; boundary="ALT"

--ALT
Content-Type: text/plain; charset="utf-8"

Plain body
--ALT
Content-Type: text/html; charset="utf-8"

<p>HTML body</p>
--ALT--
--BOUNDARY
Content-Type: text/plain; name="notes.txt"
Content-Disposition: attachment; filename="notes.txt"

Attachment text
--BOUNDARY--
"""


class TestMimeEmailParser:
    """邮件解析测试"""

    def test_parse_plain_text_email(self):
        """测试解析纯文本邮件"""
        parser = MimeEmailParser()

        result = parser.parse(create_mock_email_data())

        assert result.message_id == "<test@example.com>"
        assert result.from_address == "sender@example.com"
        assert result.to_addresses == ("recipient@example.com",)
        assert result.subject == "Test Subject"
        assert result.body_text.strip() == "Test body content"
        assert result.body_html is None
        assert result.received_at.year == 2024

    def test_parse_multipart_skips_attachments(self):
        """测试解析多部分邮件并跳过附件"""
        parser = MimeEmailParser()

        result = parser.parse(MULTIPART_EMAIL)

        assert result.body_text.strip() == "Plain body"
        assert result.body_html.strip() == "<p>HTML body</p>"
        assert result.to_addresses == ("first@example.com", "second@example.com")
        assert "sender@example.com" in result.from_address

    def test_parse_encoded_subject(self):
        """测试解码编码的主题"""
        parser = MimeEmailParser()

        result = parser.parse(create_mock_email_data(subject="=?utf-8?b?5rWL6K+V?="))

        assert result.subject == "测试"

    def test_missing_message_id_uses_fallback(self):
        """测试缺少 Message-ID 时使用备用标识"""
        parser = MimeEmailParser()
        raw = b"Subject: No id\n\nbody\n"

        result = parser.parse(raw, fallback_id="42")

        assert result.message_id == "unknown-42"
        assert result.to_addresses == ()

    def test_invalid_date_falls_back_to_now(self):
        """测试无效日期返回当前时间"""
        parser = MimeEmailParser()
        raw = b"Subject: Bad date\nDate: not a date\n\nbody\n"

        result = parser.parse(raw)

        assert isinstance(result.received_at, datetime)

    def test_decode_header_value_none(self):
        """测试解码 None 值"""
        parser = MimeEmailParser()

        assert parser._decode_header_value(None) == ""
