"""Tests for terminal presentation."""

import io

from lock_diff.output import make_console, needs_pager, present


def _console(use_color=True, **kwargs):
    buffer = io.StringIO()
    return make_console(use_color, file=buffer, **kwargs), buffer


class TestPresent:
    """Tests for present()."""

    def test_markers_stripped_on_plain_file(self):
        """Non-terminal output never carries markers or ANSI codes."""
        console, buffer = _console(use_color=True)

        present("[addition]+[/addition] anyhow 1.0.75", use_color=True, console=console)

        assert buffer.getvalue() == "+ anyhow 1.0.75\n"

    def test_plain_text_left_alone(self):
        """Without colour, brackets are printed literally."""
        console, buffer = _console(use_color=False)

        present("+ [weird] 1.0.0", use_color=False, console=console)

        assert buffer.getvalue() == "+ [weird] 1.0.0\n"

    def test_color_on_terminal(self):
        """Markers become ANSI styles on a terminal."""
        console, buffer = _console(use_color=True, force_terminal=True, color_system="standard")

        present("[removal]-[/removal] memchr 2.6.0", use_color=True, use_pager=False,
                console=console)

        assert "\x1b[" in buffer.getvalue()
        assert "memchr 2.6.0" in buffer.getvalue()

    def test_long_lines_not_wrapped(self):
        console, buffer = _console(use_color=False, width=20)
        line = "~ some-crate 1.0.0 → 2.0.0 (source, checksum changed)"

        present(line, use_color=False, console=console)

        assert buffer.getvalue() == line + "\n"


class TestNeedsPager:
    """Tests for the pager decision."""

    def test_not_a_terminal(self):
        console, _ = _console(height=5)

        assert not needs_pager("\n".join(["x"] * 50), console)

    def test_terminal_with_short_text(self):
        console, _ = _console(force_terminal=True, height=10)

        assert not needs_pager("one\ntwo", console)

    def test_terminal_with_long_text(self):
        console, _ = _console(force_terminal=True, height=10)

        assert needs_pager("\n".join(["x"] * 11), console)
