"""远程邮件收取服务实现"""

import asyncio
import concurrent.futures
import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import aclosing
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, List, Optional, TypeVar, Union

from application.mail.services.mail_reader import (
    MailReader,
    MessageLoadedCallback,
    MessageErrorCallback,
)
from domain.common.exceptions import (
    InvalidOperationException,
    UnsupportedAccountTypeException,
    is_unrecoverable,
)
from domain.mailbox.value_objects.email_account import EmailAccount
from domain.mail.events.mail_events import (
    DeleteMailError,
    LoadMailError,
    MailReaderEvent,
    RemoteMailLoaded,
)
from domain.mail.services.mail_session import (
    ImapSession,
    MailSession,
    MailSessionFactory,
    Pop3Session,
)
from domain.mail.value_objects.mail_reader_request import MailReaderRequest
from domain.mail.value_objects.message_identifiers import (
    ImapUid,
    MessageIdentifier,
    Pop3Index,
)
from domain.mail.value_objects.parsed_email import ParsedEmail

T = TypeVar("T")


@dataclass(frozen=True)
class MessageFetched:
    """单封邮件收取成功"""

    message: ParsedEmail


@dataclass(frozen=True)
class MessageFetchFailed:
    """单封邮件收取失败（可恢复）"""

    exception: Exception


FetchOutcome = Union[MessageFetched, MessageFetchFailed]


class MailReaderService(MailReader):
    """
    远程邮件收取服务实现

    使用 asyncio 编排一次完整的收取过程：
    - 会话上的阻塞调用在本次收取独占的单线程 executor 中顺序执行
    - 每个网络调用前后都检查取消信号
    - 单封邮件的收取/删除失败转换为错误事件，不中断整批
    - MemoryError、RecursionError 始终向上传播
    - 任何退出路径上都断开会话

    不同账号的收取可以并发调用，每次调用拥有独立的会话和 executor。
    """

    def __init__(
        self,
        session_factory: MailSessionFactory,
        logger: Optional[logging.Logger] = None,
    ):
        """
        初始化邮件收取服务

        Args:
            session_factory: 邮件会话工厂
            logger: 可选的日志记录器
        """
        self._session_factory = session_factory
        self._logger = logger or logging.getLogger(__name__)

    async def load_from_server(
        self,
        request: MailReaderRequest,
        cancel_event: Optional[asyncio.Event] = None,
        *,
        on_message_loaded: Optional[MessageLoadedCallback] = None,
        on_load_error: Optional[MessageErrorCallback] = None,
        on_delete_error: Optional[MessageErrorCallback] = None,
    ) -> None:
        self._validate_request(request)

        async with aclosing(self.iter_from_server(request, cancel_event)) as events:
            async for event in events:
                match event:
                    case RemoteMailLoaded():
                        if on_message_loaded is not None:
                            on_message_loaded(event.account, event.mail_message)
                    case LoadMailError():
                        if on_load_error is not None:
                            on_load_error(event.account, event.id, event.exception)
                    case DeleteMailError():
                        if on_delete_error is not None:
                            on_delete_error(event.account, event.id, event.exception)

    async def iter_from_server(
        self,
        request: MailReaderRequest,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> AsyncIterator[MailReaderEvent]:
        account = self._validate_request(request)
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mail-reader-")

        try:
            session = await self._open_session(executor, account, cancel_event)
            try:
                identifiers = await self._call(
                    executor, cancel_event, self._list_identifiers, session
                )
                total = len(identifiers)
                identifiers = request.apply_limit(identifiers)
                self._logger.info(
                    f"[{account.display_name}] Found {total} message(s), "
                    f"fetching {len(identifiers)}"
                )

                loaded_count = 0
                for message_id in identifiers:
                    outcome = await self._fetch_one(
                        executor, cancel_event, account, session, message_id
                    )
                    match outcome:
                        case MessageFetchFailed(exception=error):
                            yield LoadMailError(account=account, id=str(message_id), exception=error)
                            continue
                        case MessageFetched(message=message):
                            loaded_count += 1
                            yield RemoteMailLoaded(account=account, mail_message=message)

                    if not request.do_auto_delete:
                        continue

                    delete_error = await self._delete_one(
                        executor, cancel_event, account, session, message_id
                    )
                    if delete_error is not None:
                        yield DeleteMailError(account=account, id=str(message_id), exception=delete_error)

                self._logger.info(
                    f"[{account.display_name}] Fetch complete: "
                    f"{loaded_count}/{len(identifiers)} message(s) loaded"
                )
            finally:
                await self._release(executor, session)
        finally:
            executor.shutdown(wait=False)

    def _validate_request(self, request: Optional[MailReaderRequest]) -> EmailAccount:
        """
        检查请求的前置条件，不产生任何网络访问

        Returns:
            请求中的账号

        Raises:
            InvalidOperationException: 请求或账号为空、用户名为空
            UnsupportedAccountTypeException: 账号类型不是 IMAP/POP3
        """
        if request is None:
            raise InvalidOperationException(
                operation="load_from_server",
                reason="Request cannot be None",
            )

        account = request.account
        if account is None:
            raise InvalidOperationException(
                operation="load_from_server",
                reason="Request account cannot be None",
            )

        if not account.is_remote:
            raise UnsupportedAccountTypeException(account.account_type)

        if not account.username or not account.username.strip():
            raise InvalidOperationException(
                operation="load_from_server",
                reason=f"Receiving account username can't be empty: {account.email}",
            )

        return account

    async def _open_session(
        self,
        executor: ThreadPoolExecutor,
        account: EmailAccount,
        cancel_event: Optional[asyncio.Event],
    ) -> MailSession:
        """
        打开会话

        如果在会话建立过程中被取消，会话建立完成后立即在工作线程中关闭，
        此时事件循环可能已经结束。
        """
        self._raise_if_cancelled(cancel_event)
        future = executor.submit(self._session_factory.open, account)
        try:
            return await self._wait(future, cancel_event)
        except asyncio.CancelledError:
            future.add_done_callback(self._close_abandoned_session)
            raise

    async def _call(
        self,
        executor: ThreadPoolExecutor,
        cancel_event: Optional[asyncio.Event],
        func: Callable[..., T],
        session: MailSession,
        *args: Any,
    ) -> T:
        """
        在 executor 中执行一次阻塞的会话调用

        调用进行中被取消时中断会话的 socket，让工作线程尽快结束这次调用。
        """
        self._raise_if_cancelled(cancel_event)
        future = executor.submit(func, session, *args)
        try:
            return await self._wait(future, cancel_event)
        except asyncio.CancelledError:
            if not future.done():
                self._abort(session)
            raise

    async def _wait(
        self,
        future: "concurrent.futures.Future[T]",
        cancel_event: Optional[asyncio.Event],
    ) -> T:
        """
        等待 executor 调用完成或取消信号触发

        asyncio.wait 不会取消被等待的 future，取消后调用在工作线程中运行到结束。
        """
        wrapped = asyncio.wrap_future(future)
        waiters = {wrapped}
        cancel_waiter = None
        if cancel_event is not None:
            cancel_waiter = asyncio.ensure_future(cancel_event.wait())
            waiters.add(cancel_waiter)

        try:
            await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            if not wrapped.done():
                wrapped.add_done_callback(self._discard_result)

        if wrapped.done():
            return wrapped.result()
        raise asyncio.CancelledError("Mail fetch cancelled")

    async def _fetch_one(
        self,
        executor: ThreadPoolExecutor,
        cancel_event: Optional[asyncio.Event],
        account: EmailAccount,
        session: MailSession,
        message_id: MessageIdentifier,
    ) -> FetchOutcome:
        try:
            message = await self._call(
                executor, cancel_event, self._fetch_message, session, message_id
            )
        except Exception as e:
            if is_unrecoverable(e):
                raise
            self._logger.warning(f"[{account.display_name}] Failed to load message {message_id}: {e}")
            return MessageFetchFailed(exception=e)
        return MessageFetched(message=message)

    async def _delete_one(
        self,
        executor: ThreadPoolExecutor,
        cancel_event: Optional[asyncio.Event],
        account: EmailAccount,
        session: MailSession,
        message_id: MessageIdentifier,
    ) -> Optional[Exception]:
        try:
            await self._call(
                executor, cancel_event, self._delete_message, session, message_id
            )
        except Exception as e:
            if is_unrecoverable(e):
                raise
            self._logger.warning(f"[{account.display_name}] Failed to delete message {message_id}: {e}")
            return e
        return None

    async def _release(self, executor: ThreadPoolExecutor, session: MailSession) -> None:
        """断开会话，取消信号不影响释放"""
        self._logger.debug("Disconnecting mail session")
        await asyncio.shield(asyncio.wrap_future(executor.submit(session.close)))

    def _abort(self, session: MailSession) -> None:
        self._logger.debug("Aborting in-flight mail session call")
        session.abort()

    @staticmethod
    def _list_identifiers(session: MailSession) -> List[MessageIdentifier]:
        """按从旧到新的顺序列出会话中的全部邮件标识"""
        match session:
            case ImapSession():
                return list(session.search_all())
            case Pop3Session():
                return [Pop3Index(index) for index in range(session.message_count())]
            case _:
                raise TypeError(f"Unsupported mail session: {type(session).__name__}")

    @staticmethod
    def _fetch_message(session: MailSession, message_id: MessageIdentifier) -> ParsedEmail:
        match session, message_id:
            case ImapSession(), ImapUid():
                return session.fetch(message_id)
            case Pop3Session(), Pop3Index():
                return session.fetch(message_id)
            case _:
                raise TypeError(
                    f"Identifier {type(message_id).__name__} does not belong to "
                    f"{type(session).__name__}"
                )

    @staticmethod
    def _delete_message(session: MailSession, message_id: MessageIdentifier) -> None:
        match session, message_id:
            case ImapSession(), ImapUid():
                session.delete(message_id)
            case Pop3Session(), Pop3Index():
                session.delete(message_id)
            case _:
                raise TypeError(
                    f"Identifier {type(message_id).__name__} does not belong to "
                    f"{type(session).__name__}"
                )

    @staticmethod
    def _raise_if_cancelled(cancel_event: Optional[asyncio.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise asyncio.CancelledError("Mail fetch cancelled")

    def _close_abandoned_session(self, future: "concurrent.futures.Future[MailSession]") -> None:
        """
        关闭取消后才建立完成的会话

        作为 concurrent.futures.Future 的回调在工作线程中执行，不依赖事件循环。
        """
        if future.cancelled() or future.exception() is not None:
            return
        self._logger.debug("Closing session opened after cancellation")
        future.result().close()

    @staticmethod
    def _discard_result(future: "asyncio.Future[Any]") -> None:
        if not future.cancelled():
            future.exception()
