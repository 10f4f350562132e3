"""连接辅助函数：SSL 上下文、证书检查与 socket 中断"""

import logging
import socket
import ssl
from typing import Any, Optional

from domain.mail.services.mail_session import MailConnectionError


def create_ssl_context() -> ssl.SSLContext:
    """
    创建收取邮件使用的 SSL 上下文

    不校验证书链和主机名，证书是否可接受由 ensure_peer_certificate() 判断。
    """
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def ensure_peer_certificate(sock: Any, server: str, port: int) -> None:
    """
    确认服务器提供了证书

    只有在完全拿不到服务器证书时才拒绝连接，其余证书问题一律放行。

    Args:
        sock: 已完成 TLS 握手的 socket
        server: 服务器地址（用于错误信息）
        port: 服务器端口

    Raises:
        MailConnectionError: 服务器没有提供证书
    """
    getpeercert = getattr(sock, "getpeercert", None)
    certificate = getpeercert(binary_form=True) if getpeercert else None
    if not certificate:
        raise MailConnectionError(
            server=server,
            port=port,
            message="Remote certificate not available",
        )


def quote_mailbox(name: str) -> str:
    """按 IMAP 语法给包含空格或引号的邮箱名加引号"""
    if name.startswith('"') and name.endswith('"') and len(name) > 1:
        return name
    if any(ch in name for ch in ' "\\(){%*'):
        escaped = name.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return name


def shutdown_socket(sock: Optional[socket.socket], logger: logging.Logger) -> None:
    """
    关闭 socket 的读写方向，使其他线程中阻塞的收发立即返回

    不关闭文件描述符，连接对象仍由持有它的线程负责关闭。

    Args:
        sock: 连接使用的 socket，可以为 None
        logger: 记录 shutdown 失败的日志记录器
    """
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError as e:
        logger.debug(f"Error during socket shutdown: {e}")
