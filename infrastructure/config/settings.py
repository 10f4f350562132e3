"""
应用配置管理

使用 pydantic-settings 管理环境变量和配置
"""

from typing import Literal, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.mailbox.value_objects.email_account import DEFAULT_MAILBOX, EmailAccount
from domain.mailbox.value_objects.mailbox_enums import EmailAccountType
from domain.mail.value_objects.mail_reader_request import MailReaderRequest


class Settings(BaseSettings):
    """
    应用配置类

    自动从环境变量和 .env 文件读取配置
    """

    # ========== 应用环境 ==========
    app_env: Literal["test", "dev", "staging", "prod"] = "dev"
    app_name: str = "MailReader"
    app_version: str = "1.0.0"
    debug: bool = False

    # ========== 日志配置 ==========
    log_level: str = "INFO"
    log_file: str = "logs/app.log"

    # ========== 邮件传输配置 ==========
    mail_timeout: float = 30.0  # 传输层超时（秒）

    # ========== 默认收取账号 ==========
    mail_account_type: EmailAccountType = EmailAccountType.IMAP
    mail_email: str = ""
    mail_username: str = ""
    mail_password: str = Field(default="", repr=False)
    mail_incoming_address: str = ""
    mail_port: int = 0  # 0 表示使用协议默认端口
    mail_enable_ssl: bool = True
    mail_mailbox: str = DEFAULT_MAILBOX
    mail_alias: str = ""
    mail_limit: Optional[int] = None
    mail_auto_delete: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # 忽略未定义的环境变量
    )

    @property
    def is_test(self) -> bool:
        """是否为测试环境"""
        return self.app_env == "test"

    @property
    def is_dev(self) -> bool:
        """是否为开发环境"""
        return self.app_env == "dev"

    @property
    def is_prod(self) -> bool:
        """是否为生产环境"""
        return self.app_env == "prod"

    def build_account(self) -> EmailAccount:
        """根据配置构造默认收取账号"""
        return EmailAccount(
            account_type=self.mail_account_type,
            email=self.mail_email,
            username=self.mail_username,
            password=self.mail_password,
            incoming_address=self.mail_incoming_address,
            port=self.mail_port,
            enable_secure_protocol=self.mail_enable_ssl,
            mailbox=self.mail_mailbox,
            alias=self.mail_alias,
        )

    def build_request(self) -> MailReaderRequest:
        """根据配置构造默认收取请求"""
        return MailReaderRequest(
            account=self.build_account(),
            do_auto_delete=self.mail_auto_delete,
            limit_total_fetching=self.mail_limit,
        )


# 全局配置实例（单例）
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    获取配置实例（单例模式）

    Returns:
        Settings 实例
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
