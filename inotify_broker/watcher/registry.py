"""Registry mapping kernel watch descriptors to live Watch objects."""

import errno
import logging
from typing import Dict, List, Optional

from .base import BaseWatchRegistry
from .channel import BaseChannel
from .errors import InvalidPathError
from .watch import EventCallback, Watch

logger = logging.getLogger(__name__)


class WatchRegistry(BaseWatchRegistry):
    """Owns the ``wd -> Watch`` map for one channel.

    Not thread-safe: callers sharing a channel across threads must
    serialise access themselves.
    """

    def __init__(self, channel: BaseChannel) -> None:
        super().__init__()
        self._channel = channel
        self._watches: Dict[int, Watch] = {}

    def register(
        self,
        path: str,
        mask: int,
        callback: Optional[EventCallback] = None,
    ) -> Watch:
        """Add a kernel watch on ``path`` and index it by its descriptor."""
        if not isinstance(path, str) or not path:
            raise InvalidPathError(errno.EINVAL, "Watch path must be a non-empty string")

        wd = self._channel.add_watch(path, mask)

        previous = self._watches.get(wd)
        if previous is not None:
            # The kernel hands back the existing wd when an inode is watched twice.
            logger.info(f"Watch {wd} re-registered: {previous.path} -> {path}")

        watch = Watch(self, wd, path, mask, callback)
        self._watches[wd] = watch
        logger.info(f"Registered watch {wd} on {path} (mask={int(mask):#x})")
        return watch

    def lookup(self, wd: int) -> Optional[Watch]:
        return self._watches.get(wd)

    def remove(self, wd: int) -> bool:
        """Drop the watch and ask the kernel to forget it."""
        watch = self._watches.pop(wd, None)
        if watch is None:
            return False

        if not self._channel.closed:
            self._channel.remove_watch(wd)
        logger.info(f"Cancelled watch {wd} on {watch.path}")
        return True

    def discard(self, wd: int) -> bool:
        """Drop the watch from the map only; the kernel has already removed it."""
        watch = self._watches.pop(wd, None)
        if watch is None:
            return False
        logger.debug(f"Watch {wd} on {watch.path} removed by the kernel")
        return True

    def clear(self) -> int:
        """Forget every watch without kernel calls. Returns how many were dropped."""
        count = len(self._watches)
        self._watches.clear()
        return count

    def watches(self) -> List[Watch]:
        return list(self._watches.values())

    def __len__(self) -> int:
        return len(self._watches)

    def __contains__(self, wd: object) -> bool:
        return wd in self._watches
