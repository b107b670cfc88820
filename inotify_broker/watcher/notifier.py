"""The consumer-facing inotify object."""

import logging
from typing import List, Optional

from ..models import InotifySettings
from .channel import BaseChannel, LibcChannel
from .dispatcher import Dispatcher, OverflowCallback
from .event import Event
from .registry import WatchRegistry
from .watch import EventCallback, Watch

logger = logging.getLogger(__name__)


class Inotify:
    """One inotify channel with its watches.

    Typical use::

        with Inotify() as notifier:
            notifier.watch("/etc/passwd", IN_ACCESS | IN_MODIFY, print)
            while True:
                notifier.poll()
    """

    def __init__(
        self,
        channel: Optional[BaseChannel] = None,
        on_overflow: Optional[OverflowCallback] = None,
    ) -> None:
        self._channel = channel if channel is not None else LibcChannel()
        self._registry = WatchRegistry(self._channel)
        self._dispatcher = Dispatcher(self._channel, self._registry, on_overflow)

    @property
    def channel(self) -> BaseChannel:
        return self._channel

    @property
    def registry(self) -> WatchRegistry:
        return self._registry

    def watch(self, path: str, mask: int, callback: Optional[EventCallback] = None) -> Watch:
        """Watch ``path`` for the events in ``mask``.

        Args:
            path: File or directory to watch
            mask: ``InotifyMask`` bits ORed together
            callback: Called with an ``Event`` for each notification

        Returns:
            The new Watch

        Raises:
            InotifyError: A subclass identifying the kernel failure
        """
        return self._registry.register(path, mask, callback)

    def lookup(self, wd: int) -> Optional[Watch]:
        return self._registry.lookup(wd)

    def watches(self) -> List[Watch]:
        return self._registry.watches()

    def poll(self) -> int:
        """Read pending events and invoke their callbacks.

        Blocks for at least one event unless the channel is non-blocking.

        Returns:
            Number of events handled
        """
        return self._dispatcher.poll()

    def read(self) -> List[Event]:
        """Read pending events and return them without invoking callbacks."""
        return self._dispatcher.read()

    @property
    def on_overflow(self) -> Optional[OverflowCallback]:
        return self._dispatcher.on_overflow

    @on_overflow.setter
    def on_overflow(self, callback: Optional[OverflowCallback]) -> None:
        self._dispatcher.on_overflow = callback

    def fileno(self) -> int:
        """Descriptor to hand to an event loop; call ``poll`` when it is readable."""
        return self._channel.fileno()

    @property
    def blocking(self) -> bool:
        return self._channel.blocking

    @blocking.setter
    def blocking(self, blocking: bool) -> None:
        self._channel.set_blocking(blocking)

    @property
    def closed(self) -> bool:
        return self._channel.closed

    def close(self) -> None:
        """Close the channel. Remaining watches are dropped without kernel calls."""
        dropped = self._registry.clear()
        if self._channel.closed:
            return
        self._channel.close()
        logger.info(f"Inotify closed, dropped {dropped} watches")

    def __enter__(self) -> "Inotify":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __del__(self) -> None:
        channel = getattr(self, "_channel", None)
        if channel is not None and not channel.closed:
            self.close()


def open_channel(
    settings: Optional[InotifySettings] = None,
    on_overflow: Optional[OverflowCallback] = None,
) -> Inotify:
    """Open a new inotify instance.

    Args:
        settings: Channel settings; defaults come from ``INOTIFY_*`` environment variables
        on_overflow: Called when the kernel event queue overflows

    Raises:
        ResourceLimitError: If the descriptor or instance limits are reached
    """
    settings = settings or InotifySettings()
    channel = LibcChannel(
        buffer_size=settings.buffer_size,
        blocking=settings.blocking,
        close_on_exec=settings.close_on_exec,
    )
    return Inotify(channel, on_overflow=on_overflow)
