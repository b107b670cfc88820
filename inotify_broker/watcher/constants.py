"""Inotify event mask vocabulary.

Values match ``<sys/inotify.h>`` bit for bit.
"""

import enum


class InotifyMask(enum.IntFlag):
    """Bits used in ``inotify_add_watch`` masks and in received events."""

    NONE = 0

    # Requestable events
    ACCESS = 0x00000001
    MODIFY = 0x00000002
    ATTRIB = 0x00000004
    CLOSE_WRITE = 0x00000008
    CLOSE_NOWRITE = 0x00000010
    OPEN = 0x00000020
    MOVED_FROM = 0x00000040
    MOVED_TO = 0x00000080
    CREATE = 0x00000100
    DELETE = 0x00000200
    DELETE_SELF = 0x00000400
    MOVE_SELF = 0x00000800

    # Status bits, only ever set by the kernel
    UNMOUNT = 0x00002000
    Q_OVERFLOW = 0x00004000
    IGNORED = 0x00008000

    # Watch modifiers
    ONLYDIR = 0x01000000
    DONT_FOLLOW = 0x02000000
    EXCL_UNLINK = 0x04000000
    MASK_ADD = 0x20000000
    ISDIR = 0x40000000
    ONESHOT = 0x80000000

    # Composites
    CLOSE = CLOSE_WRITE | CLOSE_NOWRITE
    MOVE = MOVED_FROM | MOVED_TO
    ALL_EVENTS = (
        ACCESS
        | MODIFY
        | ATTRIB
        | CLOSE_WRITE
        | CLOSE_NOWRITE
        | OPEN
        | MOVED_FROM
        | MOVED_TO
        | CREATE
        | DELETE
        | DELETE_SELF
        | MOVE_SELF
    )


# inotify_init1(2) flags
IN_NONBLOCK = 0o0004000
IN_CLOEXEC = 0o2000000

# Any of these on a received event means the kernel has dropped the watch.
TERMINAL_FLAGS = InotifyMask.UNMOUNT | InotifyMask.IGNORED | InotifyMask.ONESHOT

# Single-bit members in ascending order, used to render masks.
_NAMED_BITS = [
    member
    for member in InotifyMask
    if member.value and member.value & (member.value - 1) == 0
]

IN_ACCESS = InotifyMask.ACCESS
IN_MODIFY = InotifyMask.MODIFY
IN_ATTRIB = InotifyMask.ATTRIB
IN_CLOSE_WRITE = InotifyMask.CLOSE_WRITE
IN_CLOSE_NOWRITE = InotifyMask.CLOSE_NOWRITE
IN_OPEN = InotifyMask.OPEN
IN_MOVED_FROM = InotifyMask.MOVED_FROM
IN_MOVED_TO = InotifyMask.MOVED_TO
IN_CREATE = InotifyMask.CREATE
IN_DELETE = InotifyMask.DELETE
IN_DELETE_SELF = InotifyMask.DELETE_SELF
IN_MOVE_SELF = InotifyMask.MOVE_SELF
IN_ALL_EVENTS = InotifyMask.ALL_EVENTS
IN_UNMOUNT = InotifyMask.UNMOUNT
IN_Q_OVERFLOW = InotifyMask.Q_OVERFLOW
IN_IGNORED = InotifyMask.IGNORED
IN_ONLYDIR = InotifyMask.ONLYDIR
IN_DONT_FOLLOW = InotifyMask.DONT_FOLLOW
IN_EXCL_UNLINK = InotifyMask.EXCL_UNLINK
IN_MASK_ADD = InotifyMask.MASK_ADD
IN_ISDIR = InotifyMask.ISDIR
IN_ONESHOT = InotifyMask.ONESHOT
IN_CLOSE = InotifyMask.CLOSE
IN_MOVE = InotifyMask.MOVE


def has_flag(mask: int, flag: int) -> bool:
    """Return True if every bit of ``flag`` is set in ``mask``."""
    flag = int(flag)
    return (int(mask) & flag) == flag


def mask_names(mask: int) -> list[str]:
    """Names of the single-bit flags set in ``mask``, lowest bit first."""
    return [member.name for member in _NAMED_BITS if int(mask) & member.value]


def parse_mask(names: list[str]) -> InotifyMask:
    """Build a mask from flag names such as ``["create", "IN_DELETE"]``.

    Raises:
        ValueError: If a name is not a known flag
    """
    mask = InotifyMask.NONE
    for name in names:
        key = name.strip().upper()
        if key.startswith("IN_"):
            key = key[3:]
        try:
            mask |= InotifyMask[key]
        except KeyError:
            raise ValueError(f"Unknown inotify event: {name}") from None
    return mask


__all__ = [
    "InotifyMask",
    "TERMINAL_FLAGS",
    "IN_NONBLOCK",
    "IN_CLOEXEC",
    "has_flag",
    "mask_names",
    "parse_mask",
] + [name for name in list(globals()) if name.startswith("IN_") and name not in ("IN_NONBLOCK", "IN_CLOEXEC")]
