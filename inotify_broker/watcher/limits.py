"""Kernel-wide inotify limits from procfs."""

from pathlib import Path
from typing import Optional

from ..models import InotifyLimits

PROCFS_PATH = Path("/proc/sys/fs/inotify")


def _read_value(root: Path, name: str) -> Optional[int]:
    try:
        return int((root / name).read_text().strip())
    except (OSError, ValueError):
        return None


def read_limits(root: Path = PROCFS_PATH) -> InotifyLimits:
    """Return the current limits; values are None where inotify is unavailable."""
    return InotifyLimits(
        max_queued_events=_read_value(root, "max_queued_events"),
        max_user_instances=_read_value(root, "max_user_instances"),
        max_user_watches=_read_value(root, "max_user_watches"),
    )
