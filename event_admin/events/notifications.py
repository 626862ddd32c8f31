"""User-facing toast notifications.

Toasts are queued for the presentation layer to pick up with ``drain`` and are
also forwarded to any registered handler.
"""

import asyncio
import inspect
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, List, Union

from pydantic import BaseModel, Field

from ..logger import log_exception, logger


class ToastLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Toast(BaseModel):
    level: ToastLevel
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


ToastHandler = Union[Callable[[Toast], None], Callable[[Toast], Awaitable[None]]]


class Notifier:
    def __init__(self):
        self._pending: List[Toast] = []
        self._handlers: List[ToastHandler] = []

    def on_toast(self, handler: ToastHandler) -> None:
        """Register a sync or async handler called for every toast."""
        self._handlers.append(handler)

    @property
    def pending(self) -> list[Toast]:
        return list(self._pending)

    def drain(self) -> list[Toast]:
        """Return queued toasts and clear the queue."""
        toasts, self._pending = self._pending, []
        return toasts

    async def success(self, message: str) -> None:
        await self._notify(Toast(level=ToastLevel.SUCCESS, message=message))

    async def error(self, message: str) -> None:
        await self._notify(Toast(level=ToastLevel.ERROR, message=message))

    async def _notify(self, toast: Toast) -> None:
        self._pending.append(toast)
        logger.debug(f"Toast ({toast.level.value}): {toast.message}")
        if self._handlers:
            await asyncio.gather(
                *(self._call_handler(handler, toast) for handler in self._handlers)
            )

    @log_exception("Toast handler failed for {toast}")
    async def _call_handler(self, handler: ToastHandler, toast: Toast) -> None:
        result = handler(toast)
        if inspect.isawaitable(result):
            await result
