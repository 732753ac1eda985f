"""
Text and JSON rendering of change sets.

The text renderer produces plain text. When colour is requested, the token
naming each kind of change is wrapped in an emphasis marker such as
``[addition]+[/addition]``; mapping those markers to terminal styles is left to
the presentation layer (see ``output.py``).
"""

import json
from typing import Any, Dict, List, Optional

from rich.markup import escape

from .models import KIND_EMPHASIS, Change, ChangeKind, ChangeSet, ComparisonResult

NO_CHANGES_MESSAGE = "No package changes."
ARROW = "→"
DETAIL_INDENT = "    "


def _emphasize(token: str, emphasis: str, use_color: bool) -> str:
    if not use_color:
        return token
    return f"[{emphasis}]{escape(token)}[/{emphasis}]"


def _plain(text: Optional[str], use_color: bool) -> str:
    text = "none" if text is None else text
    return escape(text) if use_color else text


def _headline(change: Change, use_color: bool) -> str:
    label = _emphasize(change.kind.label, KIND_EMPHASIS[change.kind], use_color)
    name = _plain(change.name, use_color)

    if change.kind == ChangeKind.ADDED:
        return f"{label} {name} {_plain(change.new_version, use_color)}"
    elif change.kind in (ChangeKind.REMOVED, ChangeKind.UNCHANGED):
        return f"{label} {name} {_plain(change.old_version, use_color)}"
    elif change.kind == ChangeKind.UPDATED:
        return (f"{label} {name} {_plain(change.old_version, use_color)} "
                f"{ARROW} {_plain(change.new_version, use_color)}")
    elif change.kind == ChangeKind.CHANGED:
        fields = ", ".join(change.changed_fields())
        return (f"{label} {name} {_plain(change.old_version, use_color)} "
                f"{ARROW} {_plain(change.new_version, use_color)} ({fields} changed)")

    raise ValueError(f"Unknown change kind: {change.kind}")


def _details(change: Change, use_color: bool, show_unchanged: bool) -> List[str]:
    """Indented lines describing metadata and dependency changes."""
    if change.kind not in (ChangeKind.UPDATED, ChangeKind.CHANGED):
        return []

    lines = []
    for field_name in change.changed_fields():
        # a new version always brings a new checksum
        if change.kind == ChangeKind.UPDATED and field_name == "checksum":
            continue
        old_value = getattr(change.old, field_name)
        new_value = getattr(change.new, field_name)
        lines.append(f"{DETAIL_INDENT}{field_name}: {_plain(old_value, use_color)} "
                     f"{ARROW} {_plain(new_value, use_color)}")

    added, removed = change.dependency_changes()
    for dependency in removed:
        token = _emphasize("-", KIND_EMPHASIS[ChangeKind.REMOVED], use_color)
        lines.append(f"{DETAIL_INDENT}{token} {_plain(dependency, use_color)}")
    if show_unchanged:
        for dependency in change.kept_dependencies():
            token = _emphasize("=", KIND_EMPHASIS[ChangeKind.UNCHANGED], use_color)
            lines.append(f"{DETAIL_INDENT}{token} {_plain(dependency, use_color)}")
    for dependency in added:
        token = _emphasize("+", KIND_EMPHASIS[ChangeKind.ADDED], use_color)
        lines.append(f"{DETAIL_INDENT}{token} {_plain(dependency, use_color)}")

    return lines


def render(changes: ChangeSet, show_unchanged: bool = False, use_color: bool = True) -> str:
    """
    Format a change set as a human-readable report.

    Args:
        changes: Change set to render
        show_unchanged: Include unchanged packages
        use_color: Wrap kind tokens in emphasis markers

    Returns:
        Report text; an explicit message when nothing is left to show
    """
    visible = changes.visible(show_unchanged)
    if not visible:
        return NO_CHANGES_MESSAGE

    lines = []
    for change in visible:
        lines.append(_headline(change, use_color))
        lines.extend(_details(change, use_color, show_unchanged))

    return "\n".join(lines)


def render_report(
    result: ComparisonResult,
    show_unchanged: bool = False,
    use_color: bool = True
) -> str:
    """Render a full comparison, noting a lock format version change first."""
    body = render(result.changes, show_unchanged, use_color)
    if not result.lock_version_changed():
        return body

    header = _emphasize("lock format version:", KIND_EMPHASIS[ChangeKind.UPDATED], use_color)
    old_version = result.old_metadata.lock_version
    new_version = result.new_metadata.lock_version
    return f"{header} {old_version} {ARROW} {new_version}\n\n{body}"


def _change_to_dict(change: Change) -> Dict[str, Any]:
    added, removed = change.dependency_changes()
    return {
        'kind': change.kind.value,
        'name': change.name,
        'old_version': change.old_version,
        'new_version': change.new_version,
        'changed_fields': change.changed_fields(),
        'dependencies_added': added,
        'dependencies_removed': removed,
    }


def render_json(result: ComparisonResult, show_unchanged: bool = False) -> str:
    """
    Render a comparison as a JSON document.

    Args:
        result: ComparisonResult object
        show_unchanged: Include unchanged packages in the change list

    Returns:
        JSON text with sorted keys
    """
    def metadata(meta):
        return {
            'filename': meta.filename,
            'package_count': meta.package_count,
            'lock_version': meta.lock_version,
            'file_size': meta.file_size,
        }

    json_data = {
        'old': metadata(result.old_metadata),
        'new': metadata(result.new_metadata),
        'counts': {kind.value: count for kind, count in result.changes.counts().items()},
        'changes': [_change_to_dict(c) for c in result.changes.visible(show_unchanged)],
    }

    return json.dumps(json_data, indent=2, sort_keys=True)
