# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Display`, the output sink commands write to while a program runs.

Messages are put on a bounded `asyncio.Queue` and written to a rich console by a
single consumer task, so output keeps the order it was sent in even when several
coroutines print. Delivery is at-most-once: when the queue is full the message is
dropped with a warning rather than blocking the sender.

The consumer checks a done signal before every dequeue. `close()` drains what is
queued and stops; `abort()` stops without draining. Sending to a display that is
done raises `DisplayClosedError`.

Every rendered line is kept in `history` until `clear_history()`, and can be
written to a file with `save_history()`.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from arbor.console import console as default_console
from arbor.exceptions import DisplayClosedError
from arbor.logger import logger


@dataclass(frozen=True)
class TextMessage:
    """Text written to the console. `end` is appended after the text."""

    text: str
    end: str = "\n"
    markup: bool = False


@dataclass(frozen=True)
class LogMessage:
    """Text written to the program log instead of the console."""

    text: str


DisplayMessage = TextMessage | LogMessage


class Display:
    """
    Ordered, bounded output sink backed by an asyncio queue.

    Args:
        console (Console | None): Console to write to. Defaults to Arbor's console.
        tab_size (int): Tab stop width used to expand tabs in text.
        maxsize (int): Queue capacity. Messages sent while it is full are dropped.
    """

    def __init__(
        self,
        console: Console | None = None,
        tab_size: int = 3,
        maxsize: int = 256,
    ) -> None:
        self.console = console or default_console
        self.tab_size = tab_size
        self.maxsize = maxsize
        self.history: list[str] = []
        self._queue: asyncio.Queue[DisplayMessage | None] | None = None
        self._task: asyncio.Task | None = None
        self._done = False

    @property
    def is_done(self) -> bool:
        return self._done

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the consumer task on the running event loop."""
        if self.running:
            return
        self._done = False
        self._queue = asyncio.Queue(maxsize=self.maxsize)
        self._task = asyncio.create_task(self._consume(), name="arbor-display")
        logger.debug("Display started (maxsize=%d)", self.maxsize)

    def send(self, message: DisplayMessage | str) -> bool:
        """
        Queue a message for output.

        Before `start()`, the message is rendered right away.

        Returns:
            bool: False if the message was dropped because the queue was full.

        Raises:
            DisplayClosedError: If the display is done.
        """
        if self._done:
            raise DisplayClosedError()
        if isinstance(message, str):
            message = TextMessage(message)
        if self._queue is None or not self.running:
            self._render(message)
            return True
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning("Display queue is full, dropping message: %r", message)
            return False
        return True

    async def flush(self) -> None:
        """Wait until every queued message has been written."""
        if self._queue is not None and self.running:
            await self._queue.join()

    async def close(self) -> None:
        """Write the queued messages, then stop the consumer."""
        if self._done:
            return
        if self._queue is not None and self.running:
            await self._queue.put(None)
            await self._task
        self._done = True
        logger.debug("Display closed")

    def abort(self) -> None:
        """Stop the consumer without writing what is still queued."""
        self._done = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        logger.debug("Display aborted")

    def clear_history(self) -> None:
        self.history.clear()

    def save_history(self, path: Path | str) -> None:
        """Write every line in the history to `path`, one per line."""
        with open(path, "w", encoding="UTF-8") as file:
            for line in self.history:
                file.write(f"{line}\n")

    async def _consume(self) -> None:
        queue = self._queue
        while queue is not None and not self._done:
            message = await queue.get()
            try:
                if message is None:
                    return
                self._render(message)
            finally:
                queue.task_done()

    def _render(self, message: DisplayMessage) -> None:
        text = message.text.expandtabs(self.tab_size)
        self.history.append(text)
        if isinstance(message, LogMessage):
            logger.info(text)
            return
        self.console.print(text, end=message.end, markup=message.markup, highlight=False)
