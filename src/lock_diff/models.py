"""
Data models for the lock diff tool.

This module contains the core data structures used throughout the application
for representing locked packages, lock files, and the changes between them.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from enum import Enum
import re


class ChangeKind(Enum):
    """
    Kinds of change between two lock snapshots.

    Members are declared in report precedence order; changes for the same
    package name are listed in this order.
    """
    ADDED = "added"
    REMOVED = "removed"
    UPDATED = "updated"
    CHANGED = "changed"
    UNCHANGED = "unchanged"

    @property
    def precedence(self) -> int:
        return _KIND_ORDER.index(self)

    @property
    def label(self) -> str:
        """Single-character label used in plain text output."""
        return KIND_LABELS[self]


_KIND_ORDER = list(ChangeKind)

KIND_LABELS = {
    ChangeKind.ADDED: "+",
    ChangeKind.REMOVED: "-",
    ChangeKind.UPDATED: "~",
    ChangeKind.CHANGED: "~",
    ChangeKind.UNCHANGED: "=",
}

_NUMERIC = re.compile(r"^\d+$")


def version_sort_key(version: str) -> Tuple:
    """
    Build an ordering key for a semver-like version string.

    Build metadata after ``+`` is ignored, dot-separated numeric parts
    compare as integers and sort before textual parts, and a pre-release
    sorts before the release it belongs to. The raw string is the final
    element so that distinct strings never compare equal.

    Args:
        version: Version string such as ``1.2.3`` or ``0.4.0-alpha.1``

    Returns:
        Tuple suitable for use as a sort key
    """
    core, _, _build = version.partition("+")
    release, dash, pre = core.partition("-")

    def parts(text: str) -> Tuple:
        return tuple(
            (0, int(part), "") if _NUMERIC.match(part) else (1, 0, part)
            for part in text.split(".")
        )

    # (1,) marks a final release, which sorts after any of its pre-releases
    pre_key = (0, parts(pre)) if dash else (1, ())
    return (parts(release), pre_key, version)


@dataclass(frozen=True)
class PackageRecord:
    """
    One resolved dependency entry from a lock file.

    The identity of a record is its ``(name, version)`` pair: the same name may
    appear several times in one lock file at different versions.
    """
    name: str
    version: str
    source: Optional[str] = None
    checksum: Optional[str] = None
    dependencies: Tuple[str, ...] = ()

    @property
    def key(self) -> Tuple[str, str]:
        """Identity key of this record."""
        return (self.name, self.version)

    def same_metadata(self, other: 'PackageRecord') -> bool:
        """Check whether source and checksum match another record."""
        return self.source == other.source and self.checksum == other.checksum


@dataclass(frozen=True)
class LockFile:
    """A parsed lock file: format version plus packages in file order."""
    version: Optional[int] = None
    packages: Tuple[PackageRecord, ...] = ()


@dataclass(frozen=True)
class LockMetadata:
    """
    Metadata about a lock file.

    Contains summary information useful for displaying file details
    alongside a comparison.
    """
    filename: str
    package_count: int = 0
    lock_version: Optional[int] = None
    file_size: int = 0

    def get_file_size_str(self) -> str:
        """Get human-readable file size string."""
        if self.file_size == 0:
            return "Unknown"

        size = float(self.file_size)
        for unit in ['B', 'KB', 'MB', 'GB']:
            if size < 1024:
                return f"{size:.1f}{unit}"
            size /= 1024

        return f"{size:.1f}TB"

    def get_summary(self) -> str:
        """Generate a summary string for this lock file."""
        version = "unknown" if self.lock_version is None else str(self.lock_version)
        return (f"{self.filename}: {self.package_count} packages, "
                f"format v{version}, {self.get_file_size_str()}")


@dataclass(frozen=True)
class Change:
    """
    One entry of a change set, tagged by its kind.

    ``old`` is the record from the old snapshot and ``new`` the record from the
    new one. Added changes only carry ``new``, removed changes only carry
    ``old``; every other kind carries both.
    """
    kind: ChangeKind
    old: Optional[PackageRecord] = None
    new: Optional[PackageRecord] = None

    @classmethod
    def added(cls, record: PackageRecord) -> 'Change':
        return cls(ChangeKind.ADDED, new=record)

    @classmethod
    def removed(cls, record: PackageRecord) -> 'Change':
        return cls(ChangeKind.REMOVED, old=record)

    @classmethod
    def updated(cls, old: PackageRecord, new: PackageRecord) -> 'Change':
        return cls(ChangeKind.UPDATED, old=old, new=new)

    @classmethod
    def changed(cls, old: PackageRecord, new: PackageRecord) -> 'Change':
        return cls(ChangeKind.CHANGED, old=old, new=new)

    @classmethod
    def unchanged(cls, old: PackageRecord, new: PackageRecord) -> 'Change':
        return cls(ChangeKind.UNCHANGED, old=old, new=new)

    @property
    def name(self) -> str:
        record = self.new if self.new is not None else self.old
        return record.name

    @property
    def old_version(self) -> Optional[str]:
        return self.old.version if self.old is not None else None

    @property
    def new_version(self) -> Optional[str]:
        return self.new.version if self.new is not None else None

    def records(self) -> List[PackageRecord]:
        """Records from both snapshots covered by this change."""
        return [record for record in (self.old, self.new) if record is not None]

    def sort_key(self) -> Tuple:
        version = self.old_version if self.old is not None else self.new_version
        return (
            self.name,
            self.kind.precedence,
            version_sort_key(version),
            self.old_version or "",
            self.new_version or "",
        )

    def changed_fields(self) -> List[str]:
        """Names of the metadata fields that differ between old and new."""
        if self.old is None or self.new is None:
            return []

        fields = []
        if self.old.source != self.new.source:
            fields.append("source")
        if self.old.checksum != self.new.checksum:
            fields.append("checksum")
        return fields

    def dependency_changes(self) -> Tuple[List[str], List[str]]:
        """
        Compare the dependency lists of both records.

        Returns:
            Tuple of (added, removed) dependency strings, each sorted
        """
        if self.old is None or self.new is None:
            return [], []

        old_deps = set(self.old.dependencies)
        new_deps = set(self.new.dependencies)
        return sorted(new_deps - old_deps), sorted(old_deps - new_deps)

    def kept_dependencies(self) -> List[str]:
        """Dependencies listed by both records, sorted."""
        if self.old is None or self.new is None:
            return []

        return sorted(set(self.old.dependencies) & set(self.new.dependencies))


@dataclass(frozen=True)
class ChangeSet:
    """
    Ordered, immutable sequence of changes.

    Every record from either snapshot appears in exactly one change.
    """
    changes: Tuple[Change, ...] = ()

    @classmethod
    def from_changes(cls, changes) -> 'ChangeSet':
        """Build a change set in canonical report order."""
        return cls(tuple(sorted(changes, key=Change.sort_key)))

    def __iter__(self):
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    def counts(self) -> Dict[ChangeKind, int]:
        """Get counts of each kind of change."""
        counts = {kind: 0 for kind in ChangeKind}

        for change in self.changes:
            counts[change.kind] += 1

        return counts

    def has_changes(self) -> bool:
        """Check whether any entry is something other than unchanged."""
        return any(change.kind != ChangeKind.UNCHANGED for change in self.changes)

    def visible(self, show_unchanged: bool = False) -> List[Change]:
        """Changes that should be reported for the given verbosity."""
        if show_unchanged:
            return list(self.changes)
        return [c for c in self.changes if c.kind != ChangeKind.UNCHANGED]

    def get_summary(self) -> str:
        """Generate a summary of the change counts."""
        counts = self.counts()
        return ", ".join(f"{counts[kind]} {kind.value}" for kind in ChangeKind)


@dataclass(frozen=True)
class ComparisonResult:
    """
    Results of comparing two lock files.

    Holds the change set together with metadata about both inputs.
    """
    old_metadata: LockMetadata
    new_metadata: LockMetadata
    changes: ChangeSet = field(default_factory=ChangeSet)

    def lock_version_changed(self) -> bool:
        return self.old_metadata.lock_version != self.new_metadata.lock_version

    def get_summary(self) -> str:
        """Generate a summary of the comparison results."""
        return (f"Comparison: {len(self.changes)} packages analyzed, "
                f"{self.changes.get_summary()}")


# Emphasis marker names understood by the presentation layer
KIND_EMPHASIS = {
    ChangeKind.ADDED: "addition",
    ChangeKind.REMOVED: "removal",
    ChangeKind.UPDATED: "modification",
    ChangeKind.CHANGED: "modification",
    ChangeKind.UNCHANGED: "unchanged",
}

# Color scheme for diff highlighting, keyed by emphasis marker
EMPHASIS_STYLES = {
    "addition": "green",
    "removal": "red",
    "modification": "yellow",
    "unchanged": "dim",
}
