"""领域异常定义"""

from typing import Any

# 运行时无法恢复的异常，任何单封邮件的容错逻辑都不能吞掉它们
UNRECOVERABLE_EXCEPTIONS = (MemoryError, RecursionError)


class DomainException(Exception):
    """领域异常基类"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidValueObjectException(DomainException):
    """值对象校验失败"""

    def __init__(self, value_object_type: str, value: Any, reason: str):
        self.value_object_type = value_object_type
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {value_object_type}: {reason}")


class InvalidOperationException(DomainException):
    """非法操作（前置条件不满足）"""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Invalid operation '{operation}': {reason}")


class UnsupportedAccountTypeException(InvalidOperationException):
    """不支持的邮箱账号类型"""

    def __init__(self, account_type: Any, operation: str = "load_from_server"):
        self.account_type = account_type
        name = getattr(account_type, "value", account_type)
        super().__init__(
            operation=operation,
            reason=f"Invalid email type: {name}",
        )


def is_unrecoverable(exception: BaseException) -> bool:
    """
    判断异常是否不可恢复

    内存耗尽、递归过深等运行时故障必须向上传播；
    非 Exception 子类（如 KeyboardInterrupt、CancelledError）同样视为不可恢复。

    Args:
        exception: 捕获到的异常

    Returns:
        True 如果异常不能被转换为错误通知
    """
    if not isinstance(exception, Exception):
        return True
    return isinstance(exception, UNRECOVERABLE_EXCEPTIONS)
