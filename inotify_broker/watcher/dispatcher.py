"""Drain the channel, resolve events to watches and deliver them."""

import logging
from typing import Callable, Iterator, List, Optional, Tuple

from .channel import BaseChannel
from .constants import TERMINAL_FLAGS, InotifyMask
from .decoder import decode
from .errors import WouldBlockError
from .event import Event
from .registry import WatchRegistry
from .watch import Watch

logger = logging.getLogger(__name__)

OverflowCallback = Callable[[Event], None]


class Dispatcher:
    """Decode/resolve/deliver pipeline shared by ``poll`` and ``read``."""

    def __init__(
        self,
        channel: BaseChannel,
        registry: WatchRegistry,
        on_overflow: Optional[OverflowCallback] = None,
    ) -> None:
        self._channel = channel
        self._registry = registry
        self.on_overflow = on_overflow

    def _read_batch(self) -> Optional[bytes]:
        try:
            return self._channel.read_raw()
        except WouldBlockError:
            return None

    def _resolve(self, buffer: bytes) -> Iterator[Tuple[Optional[Watch], Event]]:
        """Yield events whose watch is registered at the moment they are reached.

        Resolution is lazy so that cancellations made by earlier callbacks in
        the same batch are seen by later events.
        """
        for raw in decode(buffer):
            if raw.mask & InotifyMask.Q_OVERFLOW:
                logger.warning("Inotify event queue overflowed, events were lost")
                yield None, Event(None, raw.name, raw.mask, raw.cookie)
                continue

            watch = self._registry.lookup(raw.wd)
            if watch is None:
                logger.debug(f"Dropping event {raw.mask:#x} for unknown watch {raw.wd}")
                continue

            yield watch, Event(watch, raw.name, raw.mask, raw.cookie)

    def _finish(self, watch: Watch, event: Event) -> None:
        """Forget the watch if the kernel has stopped reporting on it."""
        if event.mask & TERMINAL_FLAGS and self._registry.lookup(watch.wd) is watch:
            self._registry.discard(watch.wd)

    def poll(self) -> int:
        """Read one batch and invoke the callback of each resolved event.

        Queue-overflow events belong to no watch. They are passed to
        ``on_overflow`` when one is set, and count as handled in that case.

        Returns:
            Number of callbacks invoked; 0 if non-blocking and nothing was queued
        """
        buffer = self._read_batch()
        if not buffer:
            return 0

        count = 0
        for watch, event in self._resolve(buffer):
            if watch is None:
                if self.on_overflow is not None:
                    self.on_overflow(event)
                    count += 1
                continue

            callback = watch.callback
            if callback is not None:
                callback(event)
                count += 1
            self._finish(watch, event)

        logger.debug(f"Dispatched {count} events")
        return count

    def read(self) -> List[Event]:
        """Read one batch and return its resolved events instead of calling back."""
        buffer = self._read_batch()
        if not buffer:
            return []

        events = []
        for watch, event in self._resolve(buffer):
            if watch is None:
                continue
            events.append(event)
            self._finish(watch, event)
        return events
