"""Decoder for the packed ``struct inotify_event`` stream returned by read(2)."""

import os
import struct
from typing import Iterable, Iterator, NamedTuple

from .errors import DecodeError

# struct inotify_event { int wd; uint32_t mask; uint32_t cookie; uint32_t len; char name[]; }
EVENT_HEADER = struct.Struct("iIII")


class RawEvent(NamedTuple):
    """One decoded event before it is resolved to a watch."""

    wd: int
    mask: int
    cookie: int
    name: str


def decode(buffer: bytes) -> Iterator[RawEvent]:
    """Yield the events packed in ``buffer`` in kernel delivery order.

    Each header is followed by ``len`` bytes of name, NUL-terminated and
    padded. Exactly ``len`` bytes are consumed so the next header is never
    misread.

    Args:
        buffer: Bytes from a single read of the inotify descriptor

    Raises:
        DecodeError: If a header or a declared name is truncated
    """
    view = memoryview(buffer)
    offset = 0
    end = len(view)

    while offset < end:
        if end - offset < EVENT_HEADER.size:
            raise DecodeError(
                f"Truncated event header at offset {offset}: "
                f"{end - offset} of {EVENT_HEADER.size} bytes"
            )

        wd, mask, cookie, name_len = EVENT_HEADER.unpack_from(view, offset)
        offset += EVENT_HEADER.size

        if name_len > end - offset:
            raise DecodeError(
                f"Event name at offset {offset} declares {name_len} bytes, "
                f"only {end - offset} available"
            )

        name = ""
        if name_len:
            raw_name = bytes(view[offset:offset + name_len]).split(b"\x00", 1)[0]
            name = os.fsdecode(raw_name)
            offset += name_len

        yield RawEvent(wd, mask, cookie, name)


def encode(events: Iterable[RawEvent], align: int = EVENT_HEADER.size) -> bytes:
    """Pack events the way the kernel lays them out.

    Names are NUL-terminated and padded to a multiple of ``align``. Used to
    feed channels that do not talk to a real kernel.
    """
    chunks = []
    for event in events:
        name = os.fsencode(event.name)
        if name:
            padded = len(name) + 1
            padded += -padded % align
            name = name.ljust(padded, b"\x00")
        chunks.append(EVENT_HEADER.pack(event.wd, int(event.mask), event.cookie, len(name)))
        chunks.append(name)
    return b"".join(chunks)
