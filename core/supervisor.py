"""
Failure isolation for update handlers and background tasks.
"""

import asyncio
import functools
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional

from core.utils import get_error_details

logger = logging.getLogger(__name__)

HandlerCallback = Callable[..., Awaitable[Any]]


def describe_update(update: Any) -> str:
    """Short label for an update, used in log lines"""
    if update is None:
        return "unknown"
    for kind in ("message", "edited_message", "callback_query", "inline_query",
                 "channel_post", "my_chat_member", "chat_member"):
        if getattr(update, kind, None) is not None:
            return kind
    return type(update).__name__


class EventSupervisor:
    """Runs each update handler inside its own failure boundary

    A guarded callback is bounded by ``handler_timeout`` and never lets an
    exception escape: a failing update is logged and the next update is
    processed normally. Processing time is reported once per update by
    ``timing``.
    """

    def __init__(self, handler_timeout: Optional[float] = None):
        self.handler_timeout = handler_timeout
        self.processed = 0
        self.failed = 0

    def guard(self, callback: HandlerCallback) -> HandlerCallback:
        """Wrap a handler callback in the failure boundary"""

        @functools.wraps(callback)
        async def guarded(update: Any, *args, **kwargs) -> Any:
            return await self.dispatch(callback, update, *args, **kwargs)

        return guarded

    async def dispatch(self, callback: HandlerCallback, update: Any, *args, **kwargs) -> Any:
        """Run one callback for one update and report how it went"""
        handler_error: Optional[BaseException] = None

        async def invoke() -> Any:
            nonlocal handler_error
            try:
                return await callback(update, *args, **kwargs)
            except Exception as e:
                handler_error = e
                raise

        try:
            if self.handler_timeout:
                result = await asyncio.wait_for(invoke(), timeout=self.handler_timeout)
            else:
                result = await invoke()
        except Exception as e:
            self.failed += 1
            update_type = describe_update(update)
            # A TimeoutError the handler raised itself is an ordinary failure
            if self.handler_timeout and e is not handler_error and isinstance(e, asyncio.TimeoutError):
                logger.error(
                    f"[ERROR] Bot error for {update_type}: handler timed out "
                    f"after {self.handler_timeout:g} seconds"
                )
            else:
                logger.error(f"[ERROR] Bot error for {update_type}: {get_error_details(e)}")
            return None

        self.processed += 1
        return result

    @asynccontextmanager
    async def timing(self, update: Any) -> AsyncIterator[None]:
        """Log how long the whole update took, whichever handlers ran"""
        start = time.monotonic()
        try:
            yield
        finally:
            elapsed = time.monotonic() - start
            logger.info(
                f"{describe_update(update)} processed. Response time: {elapsed:.3f} seconds."
            )


def handle_loop_exception(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
    """Log failures nobody awaited instead of letting them pass silently"""
    exception = context.get("exception")
    message = context.get("message", "Unhandled exception in event loop")
    if exception is not None:
        logger.error(f"[ERROR] Unhandled exception: {message} | reason: {get_error_details(exception)}")
    else:
        logger.error(f"[ERROR] Unhandled exception: {message}")


def install_exception_handler(loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
    """Route unhandled task failures of the loop to the log"""
    loop = loop or asyncio.get_running_loop()
    loop.set_exception_handler(handle_loop_exception)
