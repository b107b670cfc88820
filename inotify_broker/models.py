from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from .watcher.watch import Watch


class InotifySettings(BaseSettings):
    """Channel settings, overridable through ``INOTIFY_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="INOTIFY_", extra="ignore")

    buffer_size: int = Field(default=65536, ge=16)
    blocking: bool = Field(default=True)
    close_on_exec: bool = Field(default=True)


class InotifyLimits(BaseModel):
    max_queued_events: int | None = Field(default=None)
    max_user_instances: int | None = Field(default=None)
    max_user_watches: int | None = Field(default=None)


class WatchInfo(BaseModel):
    wd: int
    path: str
    mask: int
    events: list[str] = Field(default_factory=list)
    has_callback: bool = Field(default=False)

    @classmethod
    def from_watch(cls, watch: "Watch") -> "WatchInfo":
        from .watcher.constants import mask_names

        return cls(
            wd=watch.wd,
            path=watch.path,
            mask=int(watch.mask),
            events=mask_names(watch.mask),
            has_callback=watch.callback is not None,
        )
