from typing import Any
from unittest.mock import Mock, patch

from dependency_injector import providers

from conftest import FakeChannel
from inotify_broker.watcher.constants import InotifyMask
from inotify_broker.watcher.errors import ResourceLimitError
from inotify_broker.watcher.notifier import Inotify


class TestMainModule:
    """Test cases for the main.py command-line entry point."""

    @patch("main.configure_logging")
    @patch("main.display_watches")
    @patch("main.console")
    def test_prints_events_until_count(
        self, mock_console: Mock, mock_display: Mock, mock_logging: Mock, fake_channel: FakeChannel
    ) -> None:
        """Events are printed and main() exits once --count is reached."""
        # Given:
        import main

        fake_channel.queue((1, int(InotifyMask.CREATE), 0, "a"), (1, int(InotifyMask.DELETE), 0, "a"))
        with main.container.notifier.override(providers.Object(Inotify(fake_channel))):
            # When:
            result = main.main(["/tmp", "-e", "create", "-e", "delete", "--count", "2"])

        # Then:
        assert result == 0
        assert fake_channel.paths == {1: "/tmp"}
        assert mock_console.print.call_count == 2
        mock_console.print.assert_any_call("[bold]/tmp/a[/bold] [cyan]CREATE[/cyan]")
        mock_console.print.assert_any_call("[bold]/tmp/a[/bold] [cyan]DELETE[/cyan]")
        assert fake_channel.closed

    @patch("main.configure_logging")
    @patch("main.console")
    def test_unknown_event_name(self, mock_console: Mock, mock_logging: Mock) -> None:
        import main

        assert main.main(["/tmp", "-e", "explode"]) == 2
        mock_console.print.assert_called_once_with("[red]Unknown inotify event: explode[/red]")

    @patch("main.configure_logging")
    @patch("main.console")
    def test_open_failure(self, mock_console: Mock, mock_logging: Mock) -> None:
        import main

        with main.container.notifier.override(providers.Callable(Mock(side_effect=ResourceLimitError(24)))):
            assert main.main(["/tmp"]) == 1

    @patch("main.configure_logging")
    @patch("main.display_watches")
    @patch("main.console")
    def test_keyboard_interrupt(
        self, mock_console: Mock, mock_display: Mock, mock_logging: Mock, fake_channel: FakeChannel, capsys: Any
    ) -> None:
        """Ctrl+C exits gracefully and closes the channel."""
        import main

        notifier = Inotify(fake_channel)
        with main.container.notifier.override(providers.Object(notifier)), patch.object(
            Inotify, "poll", side_effect=KeyboardInterrupt()
        ):
            result = main.main(["/tmp"])

        assert result == 0
        mock_console.print.assert_called_with("\n\nGoodbye!", style="bold green")
        assert fake_channel.closed

    @patch("main.configure_logging")
    @patch("main.console")
    def test_watch_failure(self, mock_console: Mock, mock_logging: Mock, fake_channel: FakeChannel) -> None:
        import main

        with main.container.notifier.override(providers.Object(Inotify(fake_channel))):
            assert main.main(["/missing/dir"]) == 1

        assert fake_channel.closed

    @patch("main.configure_logging")
    @patch("main.display_watches")
    @patch("main.console")
    def test_count_limits_events_within_one_batch(
        self, mock_console: Mock, mock_display: Mock, mock_logging: Mock, fake_channel: FakeChannel
    ) -> None:
        """--count caps printed events even when one poll delivers more."""
        import main

        create = int(InotifyMask.CREATE)
        fake_channel.queue((1, create, 0, "a"), (1, create, 0, "b"), (1, create, 0, "c"))
        with main.container.notifier.override(providers.Object(Inotify(fake_channel))):
            result = main.main(["/tmp", "--count", "2"])

        assert result == 0
        assert mock_console.print.call_count == 2
        mock_console.print.assert_any_call("[bold]/tmp/a[/bold] [cyan]CREATE[/cyan]")
        mock_console.print.assert_any_call("[bold]/tmp/b[/bold] [cyan]CREATE[/cyan]")

    @patch("main.configure_logging")
    @patch("main.display_watches")
    @patch("main.console")
    @patch("main.selectors.DefaultSelector")
    def test_non_blocking_channel_waits_for_readiness(
        self,
        mock_selector_class: Mock,
        mock_console: Mock,
        mock_display: Mock,
        mock_logging: Mock,
        fake_channel: FakeChannel,
    ) -> None:
        """A non-blocking channel is polled only after its descriptor is readable."""
        # Given:
        import main

        fake_channel.set_blocking(False)
        notifier = Inotify(fake_channel)
        mock_selector = mock_selector_class.return_value
        mock_selector.select.side_effect = [[], [(Mock(), 1)], KeyboardInterrupt()]
        poll_calls = []

        def poll() -> int:
            poll_calls.append(len(mock_selector.select.call_args_list))
            return 0

        # When:
        with main.container.notifier.override(providers.Object(notifier)), patch.object(
            notifier, "poll", side_effect=poll
        ):
            result = main.main(["/tmp"])

        # Then:
        assert result == 0
        mock_selector.register.assert_called_once_with(99, main.selectors.EVENT_READ)
        assert mock_selector.select.call_count == 3
        assert poll_calls == [2]
        mock_selector.close.assert_called_once()
        mock_console.print.assert_called_with("\n\nGoodbye!", style="bold green")

    @patch("main.configure_logging")
    @patch("main.display_watches")
    @patch("main.console")
    @patch("main.selectors.DefaultSelector")
    def test_blocking_channel_does_not_register_selector(
        self,
        mock_selector_class: Mock,
        mock_console: Mock,
        mock_display: Mock,
        mock_logging: Mock,
        fake_channel: FakeChannel,
    ) -> None:
        import main

        mock_selector_class.return_value.get_map.return_value = {}
        fake_channel.queue((1, int(InotifyMask.CREATE), 0, "a"))
        with main.container.notifier.override(providers.Object(Inotify(fake_channel))):
            assert main.main(["/tmp", "--count", "1"]) == 0

        mock_selector_class.return_value.register.assert_not_called()
        mock_selector_class.return_value.select.assert_not_called()
