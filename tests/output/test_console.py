"""Tests for Rich Console factory and theme."""

from io import StringIO

from rollctl.output.console import ROLL_THEME, create_console, get_output, style_for_status


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        assert isinstance(create_console().file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[bold red]hello[/bold red]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "hello" in output

    def test_widths(self) -> None:
        assert create_console().width == 120
        assert create_console(width=80).width == 80

    def test_theme_styles_resolve(self) -> None:
        console = create_console()
        console.print("[roll.ok]OK[/roll.ok] [roll.status.sold]sold[/roll.status.sold]")
        assert "OK sold" in get_output(console)


class TestStyleForStatus:
    def test_known_statuses(self) -> None:
        for status in ("in_stock", "reserved", "sold"):
            style = style_for_status(status)
            assert style == f"roll.status.{status}"
            assert style in ROLL_THEME.styles

    def test_unknown_status(self) -> None:
        assert style_for_status("lost") == ""
