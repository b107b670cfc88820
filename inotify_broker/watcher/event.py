"""Decoded events handed to watch callbacks."""

from dataclasses import dataclass
from typing import List, Optional

from .constants import InotifyMask, has_flag, mask_names
from .watch import Watch


@dataclass(frozen=True)
class Event:
    """A single kernel notification resolved to its watch.

    ``watch`` is ``None`` only for queue-overflow notifications, which the
    kernel does not attribute to any watch.
    """

    watch: Optional[Watch]
    name: str
    mask: int
    cookie: int = 0

    @property
    def fullname(self) -> str:
        """Path of the affected object, including the watch path."""
        if self.watch is None:
            return self.name
        return self.watch.fullname(self.name)

    def has_flag(self, flag: int) -> bool:
        return has_flag(self.mask, flag)

    @property
    def is_dir(self) -> bool:
        return has_flag(self.mask, InotifyMask.ISDIR)

    def mask_names(self) -> List[str]:
        return mask_names(self.mask)

    def __str__(self) -> str:
        flags = "|".join(self.mask_names()) or "0"
        if self.cookie:
            return f"{self.fullname} {flags} cookie={self.cookie}"
        return f"{self.fullname} {flags}"
