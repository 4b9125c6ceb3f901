"""Batching of draw commands before they are handed to the window."""

from __future__ import annotations

import logging
from typing import Any, Callable

log = logging.getLogger(__name__)

Sender = Callable[[list[Any]], Any]


class DrawCommandBatcher:
    """Collects draw commands and sends them as batches, or holds them while disabled."""

    def __init__(self) -> None:
        self._batch: list[Any] = []
        self.enabled = True
        self._queued: list[list[Any]] = []

    def queue(self, draw_command: Any) -> None:
        """Add a command to the current batch."""
        self._batch.append(draw_command)

    def set_enabled(self, enabled: bool, send: Sender) -> None:
        """Enable or disable sending; re-enabling flushes held batches in order."""
        log.info("Set redraw %s", enabled)
        if enabled and not self.enabled:
            queued, self._queued = self._queued, []
            for batch in queued:
                send(batch)
        self.enabled = enabled

    def send_batch(self, send: Sender) -> None:
        """Hand the current batch to ``send``, or hold it while disabled."""
        batch, self._batch = self._batch, []
        if self.enabled:
            send(batch)
        else:
            self._queued.append(batch)