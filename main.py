"""
Mail Reader - 单次收取入口

运行：
    uv run python main.py

账号通过环境变量或 .env 文件配置：
    MAIL_ACCOUNT_TYPE=imap            # imap / pop3
    MAIL_INCOMING_ADDRESS=imap.example.com
    MAIL_PORT=993
    MAIL_USERNAME=user@example.com
    MAIL_PASSWORD=secret
    MAIL_LIMIT=10                     # 可选，优先收取最早的邮件
    MAIL_AUTO_DELETE=false

Ctrl+C 会取消正在进行的收取，连接仍会被正常关闭。
"""

import asyncio
import signal
import sys
from collections import Counter

from common.logging import get_logger, setup_logging
from domain.mailbox.value_objects.email_account import EmailAccount
from domain.mail.value_objects.parsed_email import ParsedEmail
from infrastructure.containers import Bootstrap, bootstrap

logger = get_logger("mail_reader")


async def run_once(boot: Bootstrap) -> Counter:
    """
    按配置收取一次邮件

    Args:
        boot: 已连接的容器

    Returns:
        各类结果的计数（loaded / load_errors / delete_errors）
    """
    settings = boot.config.settings()
    reader = boot.app.mail_reader_service()
    request = settings.build_request()
    stats: Counter = Counter()

    def on_message_loaded(account: EmailAccount, message: ParsedEmail) -> None:
        stats["loaded"] += 1
        subject = message.subject or "(no subject)"
        logger.info(f"[{account.display_name}] Loaded: {subject[:50]} from {message.from_address}")
        logger.debug(f"[{account.display_name}] {message.message_id}: {message.content.preview()}")

    def on_load_error(account: EmailAccount, message_id: str, error: Exception) -> None:
        stats["load_errors"] += 1
        logger.error(f"[{account.display_name}] Load error for {message_id}: {error}")

    def on_delete_error(account: EmailAccount, message_id: str, error: Exception) -> None:
        stats["delete_errors"] += 1
        logger.error(f"[{account.display_name}] Delete error for {message_id}: {error}")

    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    except NotImplementedError:
        pass  # Windows 事件循环不支持信号处理

    logger.info(f"Fetching from {request.account.connection_string}")
    await reader.load_from_server(
        request,
        cancel_event,
        on_message_loaded=on_message_loaded,
        on_load_error=on_load_error,
        on_delete_error=on_delete_error,
    )
    return stats


def main() -> int:
    boot = bootstrap()
    settings = boot.config.settings()
    setup_logging(level=settings.log_level, log_file=settings.log_file)

    try:
        stats = asyncio.run(run_once(boot))
    except asyncio.CancelledError:
        logger.warning("Fetch cancelled")
        return 130

    logger.info(
        f"Done: {stats['loaded']} loaded, {stats['load_errors']} load errors, "
        f"{stats['delete_errors']} delete errors"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
