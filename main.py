#!/usr/bin/env python3
"""Print inotify events for the given paths until interrupted."""

import argparse
import selectors
import sys
from pathlib import Path
from typing import List, Optional

from rich.panel import Panel
from rich.table import Table

from inotify_broker.containers import container
from inotify_broker.models import InotifySettings, WatchInfo
from inotify_broker.utils import configure_logging, console, format_event, logger
from inotify_broker.watcher import Event, InotifyError, InotifyMask, parse_mask, read_limits


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Watch files and directories with inotify")
    parser.add_argument("paths", nargs="+", help="Files or directories to watch")
    parser.add_argument(
        "-e",
        "--event",
        action="append",
        default=[],
        help="Event to watch for (e.g. create, modify); may be repeated. Defaults to all events",
    )
    parser.add_argument("--oneshot", action="store_true", help="Stop watching a path after its first event")
    parser.add_argument("-c", "--count", type=int, default=None, help="Print at most this many events, then exit")
    parser.add_argument("--buffer-size", type=int, default=None, help="Read buffer size in bytes")
    parser.add_argument("--log-level", default="WARNING", help="Log level for library messages")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write debug logs to this file")
    return parser


def display_watches(infos: List[WatchInfo]) -> None:
    """Show the registered watches and the kernel limits."""
    table = Table(title="Watches")
    table.add_column("wd", justify="right")
    table.add_column("path")
    table.add_column("events")
    for info in infos:
        table.add_row(str(info.wd), info.path, ", ".join(info.events))
    console.print(table)

    limits = read_limits()
    console.print(
        Panel(
            f"max_user_watches: {limits.max_user_watches}\n"
            f"max_user_instances: {limits.max_user_instances}\n"
            f"max_queued_events: {limits.max_queued_events}",
            title="Kernel limits",
        )
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        mask = parse_mask(args.event) if args.event else InotifyMask.ALL_EVENTS
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return 2
    if args.oneshot:
        mask |= InotifyMask.ONESHOT

    settings = InotifySettings()
    if args.buffer_size is not None:
        settings = settings.model_copy(update={"buffer_size": args.buffer_size})
    container.config.from_pydantic(settings)

    seen = 0

    def print_event(event: Event) -> None:
        nonlocal seen
        if args.count is not None and seen >= args.count:
            return
        seen += 1
        console.print(format_event(event))

    try:
        notifier = container.notifier()
    except InotifyError as e:
        console.print(f"[red]Could not open inotify: {e}[/red]")
        return 1

    with notifier:
        notifier.on_overflow = lambda event: console.print("[yellow]Event queue overflowed[/yellow]")
        for path in args.paths:
            try:
                notifier.watch(path, mask, print_event)
            except InotifyError as e:
                console.print(f"[red]Cannot watch {path}: {e}[/red]")
                return 1

        display_watches([WatchInfo.from_watch(w) for w in notifier.watches()])

        selector = selectors.DefaultSelector()
        if not notifier.blocking:
            selector.register(notifier.fileno(), selectors.EVENT_READ)

        try:
            while notifier.watches() and (args.count is None or seen < args.count):
                # A non-blocking channel is only read once the descriptor is ready.
                if selector.get_map() and not selector.select():
                    continue
                notifier.poll()
        except KeyboardInterrupt:
            console.print("\n\nGoodbye!", style="bold green")
        except InotifyError as e:
            logger.exception("Reading events failed")
            console.print(f"\n[red]Error: {e}[/red]\n")
            return 1
        finally:
            selector.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
