from dependency_injector import containers, providers

from inotify_broker.models import InotifySettings
from inotify_broker.watcher.channel import LibcChannel
from inotify_broker.watcher.notifier import Inotify


class InotifyContainer(containers.DeclarativeContainer):
    config = providers.Configuration(pydantic_settings=[InotifySettings()])

    channel = providers.Factory(
        LibcChannel,
        buffer_size=config.buffer_size,
        blocking=config.blocking,
        close_on_exec=config.close_on_exec,
    )

    notifier = providers.Factory(Inotify, channel=channel)


container = InotifyContainer()
