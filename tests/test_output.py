"""Tests for output formatting."""

import io

from rich.console import Console

from bzlint.output import OutputContext, make_console


def _ctx(**kwargs) -> tuple[OutputContext, io.StringIO]:
    output = io.StringIO()
    console = Console(file=output, force_terminal=False, soft_wrap=True)
    return OutputContext(console=console, **kwargs), output


class TestOutputContext:
    """Tests for OutputContext."""

    def test_print(self) -> None:
        ctx, output = _ctx()
        ctx.print("Linting Bazel file target //src:lib.rs...")
        assert "Linting Bazel file target //src:lib.rs..." in output.getvalue()

    def test_print_suppressed_when_quiet(self) -> None:
        ctx, output = _ctx(quiet=True)
        ctx.print("hello")
        ctx.success("done")
        assert output.getvalue() == ""

    def test_error_shown_when_quiet(self) -> None:
        """Errors are never suppressed."""
        ctx, output = _ctx(quiet=True)
        ctx.error("No file specified.")
        assert "Error: No file specified." in output.getvalue()

    def test_error_keeps_brackets(self) -> None:
        """Messages are not parsed as console markup."""
        ctx, output = _ctx()
        ctx.error("Invalid config [type=enum, input_value='x']")
        assert "[type=enum, input_value='x']" in output.getvalue()

    def test_success(self) -> None:
        ctx, output = _ctx()
        ctx.success("Created config template")
        assert "Created config template" in output.getvalue()


def test_make_console_does_not_wrap(capsys) -> None:
    """Long lines stay on one line for line-oriented readers."""
    console = make_console(no_color=True)
    long_path = "/very/long/" + "segment/" * 30 + "lib.rs"
    console.print(long_path)
    assert long_path in capsys.readouterr().out
