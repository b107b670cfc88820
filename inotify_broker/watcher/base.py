"""Base watch registry interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .watch import EventCallback, Watch


class BaseWatchRegistry(ABC):
    """Abstract base class for watch registries."""

    @abstractmethod
    def register(
        self,
        path: str,
        mask: int,
        callback: Optional[EventCallback] = None,
    ) -> Watch:
        """Register a new watch and return it.

        Args:
            path: Filesystem path to watch
            mask: Requested event bits
            callback: Function to call with each Event for this watch

        Returns:
            The registered Watch

        Raises:
            InvalidPathError: If path is empty
            InotifyError: If the channel refuses the watch; the registry is
                left unchanged
        """
        pass

    @abstractmethod
    def lookup(self, wd: int) -> Optional[Watch]:
        """Get a watch by descriptor.

        Args:
            wd: Kernel watch descriptor

        Returns:
            The Watch if registered, None otherwise
        """
        pass

    @abstractmethod
    def remove(self, wd: int) -> bool:
        """Cancel a watch.

        Args:
            wd: Kernel watch descriptor

        Returns:
            True if the watch was registered, False if not found
        """
        pass

    @abstractmethod
    def discard(self, wd: int) -> bool:
        """Forget a watch the kernel has already dropped.

        Returns:
            True if the watch was registered, False if not found
        """
        pass

    @abstractmethod
    def clear(self) -> int:
        """Forget all watches without touching the kernel.

        Returns:
            Number of watches dropped
        """
        pass

    @abstractmethod
    def watches(self) -> List[Watch]:
        """Get all registered watches.

        Returns:
            List of Watch objects
        """
        pass
