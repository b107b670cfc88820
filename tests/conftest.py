"""Pytest configuration and shared fixtures for inotify broker tests."""

import errno
from collections import deque
from typing import Deque, Dict, List, Tuple, Union

import pytest

from inotify_broker.watcher.channel import BaseChannel
from inotify_broker.watcher.decoder import RawEvent, encode
from inotify_broker.watcher.errors import (
    ChannelClosedError,
    InvalidPathError,
    WouldBlockError,
)
from inotify_broker.watcher.notifier import Inotify


class FakeChannel(BaseChannel):
    """In-memory channel that hands out descriptors and replays scripted batches."""

    def __init__(self) -> None:
        self.next_wd = 1
        self.paths: Dict[int, str] = {}
        self.removed: List[int] = []
        self.batches: Deque[Union[bytes, Exception]] = deque()
        self.add_errors: Dict[str, Exception] = {}
        self._blocking = True
        self._closed = False

    def add_watch(self, path: str, mask: int) -> int:
        if self._closed:
            raise ChannelClosedError()
        if path in self.add_errors:
            raise self.add_errors[path]
        if path.startswith("/missing"):
            raise InvalidPathError(errno.ENOENT, filename=path)
        for wd, known in self.paths.items():
            if known == path:
                return wd
        wd = self.next_wd
        self.next_wd += 1
        self.paths[wd] = path
        return wd

    def remove_watch(self, wd: int) -> bool:
        self.removed.append(wd)
        return self.paths.pop(wd, None) is not None

    def queue(self, *events: Tuple[int, int, int, str]) -> None:
        """Queue one batch packed exactly as the kernel would."""
        self.batches.append(encode(RawEvent(*event) for event in events))

    def queue_raw(self, data: Union[bytes, Exception]) -> None:
        self.batches.append(data)

    def read_raw(self) -> bytes:
        if self._closed:
            raise ChannelClosedError()
        if not self.batches:
            raise WouldBlockError(errno.EAGAIN)
        item = self.batches.popleft()
        if isinstance(item, Exception):
            raise item
        return item

    def set_blocking(self, blocking: bool) -> None:
        self._blocking = blocking

    @property
    def blocking(self) -> bool:
        return self._blocking

    def fileno(self) -> int:
        return 99

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed


@pytest.fixture
def fake_channel() -> FakeChannel:
    """A fresh scripted channel."""
    return FakeChannel()


@pytest.fixture
def notifier(fake_channel: FakeChannel) -> Inotify:
    """An Inotify object wired to the fake channel."""
    return Inotify(fake_channel)
