"""Inotify watch registry and event dispatch."""

from .base import BaseWatchRegistry
from .channel import BaseChannel, LibcChannel
from . import constants
from .constants import *  # noqa: F401,F403
from .decoder import RawEvent, decode, encode
from .dispatcher import Dispatcher
from .errors import (
    ArgumentError,
    BadDescriptorError,
    ChannelClosedError,
    ChannelError,
    DecodeError,
    InotifyError,
    InterruptedReadError,
    InvalidMaskError,
    InvalidPathError,
    PermissionDeniedError,
    ResourceLimitError,
    WouldBlockError,
)
from .event import Event
from .limits import read_limits
from .notifier import Inotify, open_channel
from .registry import WatchRegistry
from .watch import Watch

__all__ = [
    "BaseChannel",
    "LibcChannel",
    "BaseWatchRegistry",
    "WatchRegistry",
    "Watch",
    "Event",
    "RawEvent",
    "Dispatcher",
    "Inotify",
    "open_channel",
    "decode",
    "encode",
    "read_limits",
    "InotifyError",
    "ResourceLimitError",
    "ArgumentError",
    "InvalidMaskError",
    "InvalidPathError",
    "BadDescriptorError",
    "PermissionDeniedError",
    "ChannelError",
    "WouldBlockError",
    "InterruptedReadError",
    "ChannelClosedError",
    "DecodeError",
] + constants.__all__
