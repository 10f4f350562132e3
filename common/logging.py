"""
日志配置

基于标准库 logging：控制台输出，可选写入日志文件。

使用示例：
    from common.logging import setup_logging, get_logger

    setup_logging(level="DEBUG", log_file="logs/app.log")
    logger = get_logger(__name__)
    logger.info("Mail reader started")
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    配置根日志记录器

    重复调用会替换之前安装的 handler，不会重复输出。

    Args:
        level: 日志级别名称
        log_file: 日志文件路径，为空时只输出到控制台

    Returns:
        根日志记录器
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


def get_logger(name: str) -> logging.Logger:
    """获取指定名称的日志记录器"""
    return logging.getLogger(name)
