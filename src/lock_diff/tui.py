"""
Terminal User Interface for lock diff browsing.

This module provides the Textual-based TUI for interactively walking through
the changes between two lock files.
"""

import asyncio
from typing import List

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Header, Footer, Static, DataTable, Label
from textual.reactive import reactive
from rich.text import Text

from .models import ComparisonResult, Change, ChangeKind
from .renderer import NO_CHANGES_MESSAGE, ARROW

KIND_STYLES = {
    ChangeKind.ADDED: "green",
    ChangeKind.REMOVED: "red",
    ChangeKind.UPDATED: "yellow",
    ChangeKind.CHANGED: "yellow",
    ChangeKind.UNCHANGED: "white",
}


class LockDiffApp(App):
    """Main TUI application for lock file comparison."""

    TITLE = "Lock Diff"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("j", "next_change", "Next"),
        ("k", "prev_change", "Previous"),
    ]

    current_index = reactive(0)

    def __init__(self, result: ComparisonResult, show_unchanged: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.result = result
        self.changes: List[Change] = result.changes.visible(show_unchanged)

    def compose(self) -> ComposeResult:
        """Create the TUI layout."""
        yield Header()

        with Container(id="main-container"):
            with Horizontal():
                # Left panel - change list
                with Vertical(id="change-list-panel"):
                    yield Label("Package Changes", id="change-list-header")
                    yield DataTable(id="change-table")

                # Right panel - change details
                with Vertical(id="change-details-panel"):
                    yield Label("Details", id="change-details-header")
                    yield Static("Select a package to view details", id="change-info")

        yield Footer()

    def on_mount(self) -> None:
        """Initialize the application."""
        old_name = self.result.old_metadata.filename
        new_name = self.result.new_metadata.filename
        self.title = f"Lock Diff: {old_name} vs {new_name}"
        self.sub_title = (f"{self.result.old_metadata.get_summary()} | "
                          f"{self.result.new_metadata.get_summary()}")

        table = self.query_one("#change-table", DataTable)
        table.add_columns("Kind", "Package", "Old", "New")
        table.cursor_type = "row"
        table.zebra_stripes = True

        self._populate_change_table()

        if self.changes:
            self._show_change_details(0)
        else:
            self.query_one("#change-info", Static).update(NO_CHANGES_MESSAGE)

    def _populate_change_table(self) -> None:
        """Populate the change table."""
        table = self.query_one("#change-table", DataTable)
        table.clear()

        for i, change in enumerate(self.changes):
            style = KIND_STYLES[change.kind]
            table.add_row(
                Text(change.kind.value.title(), style=style),
                change.name,
                change.old_version or "",
                change.new_version or "",
                key=str(i)
            )

    def _show_change_details(self, index: int) -> None:
        """Show detailed information for one change."""
        if not (0 <= index < len(self.changes)):
            return

        change = self.changes[index]
        details = [
            f"Package: {change.name}",
            f"Kind: {change.kind.value.title()}",
        ]

        for label, record in (("Old", change.old), ("New", change.new)):
            if record is None:
                continue
            details.append("")
            details.append(f"{label}:")
            details.append(f"  version:  {record.version}")
            details.append(f"  source:   {record.source or 'none'}")
            details.append(f"  checksum: {record.checksum or 'none'}")

        if change.old is not None and change.new is not None:
            if change.old_version != change.new_version:
                details.append("")
                details.append(f"Version: {change.old_version} {ARROW} {change.new_version}")

            added, removed = change.dependency_changes()
            if added or removed:
                details.append("")
                details.append("Dependencies:")
                details.extend(f"  - {d}" for d in removed)
                details.extend(f"  + {d}" for d in added)

        self.query_one("#change-info", Static).update(Text("\n".join(details)))

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Handle package selection in the table."""
        if event.row_key is not None:
            index = int(event.row_key.value)
            self.current_index = index
            self._show_change_details(index)

    def action_next_change(self) -> None:
        """Navigate to next change."""
        if self.changes and self.current_index < len(self.changes) - 1:
            self.current_index += 1
            table = self.query_one("#change-table", DataTable)
            table.move_cursor(row=self.current_index)
            self._show_change_details(self.current_index)

    def action_prev_change(self) -> None:
        """Navigate to previous change."""
        if self.changes and self.current_index > 0:
            self.current_index -= 1
            table = self.query_one("#change-table", DataTable)
            table.move_cursor(row=self.current_index)
            self._show_change_details(self.current_index)


async def run_tui(result: ComparisonResult, show_unchanged: bool = False) -> None:
    """Run the TUI application."""
    app = LockDiffApp(result, show_unchanged)
    await app.run_async()


def launch(result: ComparisonResult, show_unchanged: bool = False) -> None:
    """Run the TUI from synchronous code."""
    asyncio.run(run_tui(result, show_unchanged))
