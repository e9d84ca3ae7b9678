"""Periodic chat refresh bound to a screen's visible lifetime.

The poll loop is an asyncio task owned by the poller. ``stop()`` cancels
it; leaving the ``async with`` block does the same.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from types import TracebackType

from src.api.messaging import Message, MessagingService
from src.core.config import ChatConfig
from src.core.errors import ApiError, SessionError

logger = logging.getLogger(__name__)

MessagesCallback = Callable[[list[Message]], Awaitable[None] | None]
ErrorCallback = Callable[[SessionError], None]


class ChatPoller:
    """Re-fetches a conversation's messages every ``interval_s`` seconds.

    Usage::

        async with ChatPoller.from_config(messaging, conversation_id, settings.chat, on_messages=render):
            ...  # screen visible
    """

    def __init__(
        self,
        messaging: MessagingService,
        conversation_id: int,
        *,
        on_messages: MessagesCallback,
        on_error: ErrorCallback | None = None,
        interval_s: float = 10.0,
    ) -> None:
        if interval_s <= 0:
            msg = "interval_s must be positive"
            raise ValueError(msg)
        self._messaging = messaging
        self._conversation_id = conversation_id
        self._on_messages = on_messages
        self._on_error = on_error
        self._interval_s = interval_s
        self._task: asyncio.Task[None] | None = None

    @classmethod
    def from_config(
        cls,
        messaging: MessagingService,
        conversation_id: int,
        config: ChatConfig,
        *,
        on_messages: MessagesCallback,
        on_error: ErrorCallback | None = None,
    ) -> "ChatPoller":
        return cls(
            messaging, conversation_id,
            on_messages=on_messages, on_error=on_error, interval_s=config.poll_interval_s,
        )

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> list[Message] | None:
        """Fetch messages once and hand them to the callback.

        Transport failures are reported through ``on_error`` and do not
        stop the loop; the next tick tries again.
        """
        try:
            messages = await self._messaging.get_messages(self._conversation_id)
        except ApiError as e:
            logger.debug("Chat refresh for %d failed: %s", self._conversation_id, e.message)
            if self._on_error is not None:
                self._on_error(SessionError.from_exception(e))
            return None
        result = self._on_messages(messages)
        if result is not None:
            await result
        return messages

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=f"chat-poll-{self._conversation_id}")
        logger.debug("Chat polling started for conversation %d", self._conversation_id)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug("Chat polling stopped for conversation %d", self._conversation_id)

    async def _run(self) -> None:
        while True:
            await self.poll_once()
            await asyncio.sleep(self._interval_s)

    async def __aenter__(self) -> "ChatPoller":
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.stop()
