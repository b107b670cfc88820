"""Exception types raised by the inotify broker.

Every kernel-reported failure is an ``InotifyError`` (an ``OSError``), so
callers can either catch the specific subclass or inspect ``errno``.
"""

import errno
import os
from typing import Optional


class InotifyError(OSError):
    """Base class for all inotify broker errors."""

    def __init__(self, code: int = 0, message: Optional[str] = None, filename: Optional[str] = None) -> None:
        if message is None:
            message = os.strerror(code) if code else "inotify error"
        if filename is None:
            super().__init__(code, message)
        else:
            super().__init__(code, message, filename)


class ResourceLimitError(InotifyError):
    """A descriptor, instance, watch or memory limit was reached."""


class ArgumentError(InotifyError, ValueError):
    """The request itself was invalid and will not succeed on retry."""


class InvalidMaskError(ArgumentError):
    """The event mask contains no legal events."""


class InvalidPathError(ArgumentError):
    """The path is empty, missing or cannot be resolved."""


class BadDescriptorError(ArgumentError):
    """The inotify descriptor is not valid."""


class PermissionDeniedError(InotifyError):
    """Read access to the watched path is not permitted."""


class ChannelError(InotifyError):
    """Reading from the inotify descriptor failed."""


class WouldBlockError(ChannelError):
    """No events are queued and the channel is non-blocking."""


class InterruptedReadError(ChannelError):
    """The read was interrupted by a signal."""


class ChannelClosedError(InotifyError):
    """The channel has already been closed."""

    def __init__(self, message: str = "inotify channel is closed") -> None:
        super().__init__(errno.EBADF, message)


class DecodeError(InotifyError):
    """The raw event buffer is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(errno.EPROTO, message)


_OPEN_ERRORS = {
    errno.ENFILE: ResourceLimitError,
    errno.EMFILE: ResourceLimitError,
    errno.ENOMEM: ResourceLimitError,
    errno.EINVAL: ArgumentError,
}

_ADD_WATCH_ERRORS = {
    errno.EBADF: BadDescriptorError,
    errno.EINVAL: InvalidMaskError,
    errno.ENOMEM: ResourceLimitError,
    errno.ENOSPC: ResourceLimitError,
    errno.EACCES: PermissionDeniedError,
    errno.EPERM: PermissionDeniedError,
    errno.ENOENT: InvalidPathError,
    errno.ENOTDIR: InvalidPathError,
    errno.ELOOP: InvalidPathError,
    errno.ENAMETOOLONG: InvalidPathError,
    errno.EFAULT: InvalidPathError,
}

_READ_ERRORS = {
    errno.EAGAIN: WouldBlockError,
    errno.EINTR: InterruptedReadError,
    errno.EBADF: BadDescriptorError,
}


def open_error(code: int) -> InotifyError:
    """Map an ``inotify_init1`` errno to an exception."""
    return _OPEN_ERRORS.get(code, InotifyError)(code)


def add_watch_error(code: int, path: str) -> InotifyError:
    """Map an ``inotify_add_watch`` errno to an exception."""
    return _ADD_WATCH_ERRORS.get(code, InotifyError)(code, filename=path)


def read_error(code: int) -> InotifyError:
    """Map a ``read`` errno to an exception."""
    if code == errno.EWOULDBLOCK:
        return WouldBlockError(code)
    return _READ_ERRORS.get(code, ChannelError)(code)
