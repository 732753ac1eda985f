"""
Terminal presentation of rendered reports.

Maps the renderer's emphasis markers to colours through a rich theme and
pages long reports when writing to an interactive terminal.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.theme import Theme

from .models import EMPHASIS_STYLES

logger = logging.getLogger(__name__)

LOCK_DIFF_THEME = Theme(EMPHASIS_STYLES)


def make_console(use_color: bool = True, **kwargs) -> Console:
    """Create a console that understands the emphasis markers."""
    return Console(
        theme=LOCK_DIFF_THEME,
        no_color=not use_color,
        highlight=False,
        emoji=False,
        **kwargs
    )


def needs_pager(text: str, console: Console) -> bool:
    """Check whether text is taller than the terminal it is going to."""
    if not console.is_terminal:
        return False
    return len(text.splitlines()) > console.height


def present(
    text: str,
    use_color: bool = True,
    use_pager: bool = True,
    console: Optional[Console] = None
) -> None:
    """
    Write a rendered report.

    Args:
        text: Output of the renderer
        use_color: Whether ``text`` carries emphasis markers to interpret
        use_pager: Allow paging when the report does not fit on screen
        console: Console to write to, created on demand
    """
    if console is None:
        console = make_console(use_color)

    if use_pager and needs_pager(text, console):
        logger.debug("Report exceeds screen height, opening pager")
        with console.pager(styles=use_color):
            console.print(text, markup=use_color, soft_wrap=True)
    else:
        console.print(text, markup=use_color, soft_wrap=True)
