"""Notification channels: the thin layer over the inotify syscalls."""

import array
import ctypes
import ctypes.util
import fcntl
import logging
import os
import termios
from abc import ABC, abstractmethod
from typing import Optional

from .constants import IN_CLOEXEC, IN_NONBLOCK
from .errors import (
    ChannelClosedError,
    add_watch_error,
    open_error,
    read_error,
)

logger = logging.getLogger(__name__)


class BaseChannel(ABC):
    """Abstract handle to one kernel notification queue."""

    @abstractmethod
    def add_watch(self, path: str, mask: int) -> int:
        """Add (or update) a watch on ``path`` and return its watch descriptor.

        Args:
            path: Filesystem path to watch
            mask: Requested ``InotifyMask`` bits

        Returns:
            Kernel-assigned watch descriptor

        Raises:
            InotifyError: A subclass describing the kernel failure
        """
        pass

    @abstractmethod
    def remove_watch(self, wd: int) -> bool:
        """Remove a watch.

        Returns:
            True if the kernel removed it, False if it was already gone
        """
        pass

    @abstractmethod
    def read_raw(self) -> bytes:
        """Read one batch of packed events.

        Raises:
            WouldBlockError: If non-blocking and nothing is queued
            ChannelError: For any other read failure
        """
        pass

    @abstractmethod
    def set_blocking(self, blocking: bool) -> None:
        pass

    @property
    @abstractmethod
    def blocking(self) -> bool:
        pass

    @abstractmethod
    def fileno(self) -> int:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    @property
    @abstractmethod
    def closed(self) -> bool:
        pass


def _load_libc() -> ctypes.CDLL:
    libc = ctypes.CDLL(ctypes.util.find_library("c") or "libc.so.6", use_errno=True)

    libc.inotify_init1.argtypes = [ctypes.c_int]
    libc.inotify_init1.restype = ctypes.c_int

    libc.inotify_add_watch.argtypes = [ctypes.c_int, ctypes.c_char_p, ctypes.c_uint32]
    libc.inotify_add_watch.restype = ctypes.c_int

    libc.inotify_rm_watch.argtypes = [ctypes.c_int, ctypes.c_int]
    libc.inotify_rm_watch.restype = ctypes.c_int
    return libc


_libc: Optional[ctypes.CDLL] = None


def _get_libc() -> ctypes.CDLL:
    global _libc
    if _libc is None:
        _libc = _load_libc()
    return _libc


class LibcChannel(BaseChannel):
    """Inotify channel backed by libc through ctypes."""

    def __init__(
        self,
        buffer_size: int = 65536,
        blocking: bool = True,
        close_on_exec: bool = True,
    ) -> None:
        self._libc = _get_libc()
        self._buffer_size = buffer_size

        flags = 0
        if not blocking:
            flags |= IN_NONBLOCK
        if close_on_exec:
            flags |= IN_CLOEXEC

        fd = self._libc.inotify_init1(flags)
        if fd < 0:
            raise open_error(ctypes.get_errno())

        self._fd: Optional[int] = fd
        logger.info(f"Opened inotify channel on fd {fd}")

    def _require_fd(self) -> int:
        if self._fd is None:
            raise ChannelClosedError()
        return self._fd

    def add_watch(self, path: str, mask: int) -> int:
        fd = self._require_fd()
        wd = self._libc.inotify_add_watch(fd, os.fsencode(path), int(mask))
        if wd < 0:
            raise add_watch_error(ctypes.get_errno(), path)
        return wd

    def remove_watch(self, wd: int) -> bool:
        if self._fd is None:
            return False
        if self._libc.inotify_rm_watch(self._fd, wd) < 0:
            logger.debug(f"inotify_rm_watch({wd}) failed: {os.strerror(ctypes.get_errno())}")
            return False
        return True

    def _queued_bytes(self, fd: int) -> int:
        size = array.array("i", [0])
        try:
            fcntl.ioctl(fd, termios.FIONREAD, size, True)
        except OSError:
            return 0
        return size[0]

    def read_raw(self) -> bytes:
        fd = self._require_fd()
        size = max(self._buffer_size, self._queued_bytes(fd))
        try:
            return os.read(fd, size)
        except OSError as e:
            raise read_error(e.errno) from e

    def set_blocking(self, blocking: bool) -> None:
        os.set_blocking(self._require_fd(), blocking)

    @property
    def blocking(self) -> bool:
        return os.get_blocking(self._require_fd())

    def fileno(self) -> int:
        return self._require_fd()

    def close(self) -> None:
        if self._fd is None:
            return
        fd, self._fd = self._fd, None
        os.close(fd)
        logger.info(f"Closed inotify channel on fd {fd}")

    @property
    def closed(self) -> bool:
        return self._fd is None

    def __del__(self) -> None:
        if getattr(self, "_fd", None) is None:
            return
        try:
            self.close()
        except OSError:
            pass
