"""A single named subscription on one filesystem path."""

import weakref
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .event import Event
    from .registry import WatchRegistry

EventCallback = Callable[["Event"], None]


class Watch:
    """One registered watch.

    The watch keeps only a weak reference to the registry that created it,
    so holding on to a Watch never keeps the channel alive.
    """

    __slots__ = ("_wd", "_path", "_mask", "_callback", "_registry", "__weakref__")

    def __init__(
        self,
        registry: "WatchRegistry",
        wd: int,
        path: str,
        mask: int,
        callback: Optional[EventCallback] = None,
    ) -> None:
        self._registry = weakref.ref(registry)
        self._wd = wd
        self._path = path
        self._mask = mask
        self._callback = callback

    @property
    def wd(self) -> int:
        return self._wd

    @property
    def path(self) -> str:
        return self._path

    @property
    def mask(self) -> int:
        return self._mask

    @property
    def callback(self) -> Optional[EventCallback]:
        return self._callback

    @callback.setter
    def callback(self, callback: Optional[EventCallback]) -> None:
        self._callback = callback

    def set_callback(self, callback: Optional[EventCallback]) -> None:
        """Replace the callback; applies to every event dispatched from now on."""
        self._callback = callback

    @property
    def active(self) -> bool:
        """Whether the registry still resolves this watch."""
        registry = self._registry()
        return registry is not None and registry.lookup(self._wd) is self

    def cancel(self) -> bool:
        """Remove this watch from the registry and the kernel.

        Events already queued for it will not be delivered.

        Returns:
            True if the watch was registered, False if it was already gone
        """
        registry = self._registry()
        if registry is None or registry.lookup(self._wd) is not self:
            return False
        return registry.remove(self._wd)

    def fullname(self, name: str) -> str:
        """Join an event name onto the watched path."""
        return f"{self._path}/{name}" if name else self._path

    def __repr__(self) -> str:
        return f"Watch(wd={self._wd}, path={self._path!r}, mask={self._mask:#x})"
