"""
Lock file comparison and diff algorithm implementation.

This module compares two package indexes and classifies every record as
added, removed, updated, changed or unchanged.

Matching happens in two passes. Records whose ``(name, version)`` key exists
on both sides are compared directly. The leftovers are then matched by name
alone using positional version-ascending pairing: for each name, the leftover
versions on each side are sorted and the i-th oldest old version is paired
with the i-th oldest new version as an update. Whatever remains unpaired on
the old side is removed and on the new side is added. The one exception is a
single leftover new version facing several leftover old ones: there is no
unique predecessor, so the old versions are all removed and the new one added.

The pairing is a heuristic. A package that goes from ``{1.0, 2.0}`` to
``{2.1, 3.0}`` is reported as ``1.0 -> 2.1`` and ``2.0 -> 3.0``, which is
usually what happened, but no attempt is made to minimise version distance.
It keeps the algorithm linear after sorting and fully deterministic.
"""

import logging
import time
from typing import Dict, List, Optional

from .models import (
    Change, ChangeKind, ChangeSet, ComparisonResult, LockFile, LockMetadata,
    PackageRecord, version_sort_key,
)
from .package_index import PackageIndex

logger = logging.getLogger(__name__)


def diff(old: PackageIndex, new: PackageIndex) -> ChangeSet:
    """
    Main diff algorithm for comparing two lock snapshots.

    Args:
        old: Index of the old lock file
        new: Index of the new lock file

    Returns:
        ChangeSet covering every record of both indexes exactly once
    """
    changes: List[Change] = []

    # Exact identity matches
    for record in old:
        if record.key not in new:
            continue
        other = new.get(record.name, record.version)
        if record.same_metadata(other):
            changes.append(Change.unchanged(record, other))
        else:
            changes.append(Change.changed(record, other))

    old_leftover = _group_unmatched(old, new)
    new_leftover = _group_unmatched(new, old)

    for name in sorted(set(old_leftover) | set(new_leftover)):
        changes.extend(
            pair_by_version(old_leftover.get(name, []), new_leftover.get(name, []))
        )

    change_set = ChangeSet.from_changes(changes)
    logger.debug(f"Diff produced {len(change_set)} entries: {change_set.get_summary()}")
    return change_set


def pair_by_version(
    old_records: List[PackageRecord],
    new_records: List[PackageRecord]
) -> List[Change]:
    """
    Pair same-name records that have no exact counterpart.

    Args:
        old_records: Unmatched records of one name from the old snapshot
        new_records: Unmatched records of the same name from the new snapshot

    Returns:
        Updated changes for each positional pair, then removed/added
        changes for the remainder. A single new record facing several old
        ones is not paired at all
    """
    olds = sorted(old_records, key=lambda r: version_sort_key(r.version))
    news = sorted(new_records, key=lambda r: version_sort_key(r.version))

    # one new version against several old ones has no unique predecessor
    if len(olds) > 1 and len(news) == 1:
        return [Change.removed(o) for o in olds] + [Change.added(news[0])]

    changes = [Change.updated(o, n) for o, n in zip(olds, news)]
    changes.extend(Change.removed(o) for o in olds[len(news):])
    changes.extend(Change.added(n) for n in news[len(olds):])
    return changes


def _group_unmatched(
    index: PackageIndex,
    other: PackageIndex
) -> Dict[str, List[PackageRecord]]:
    """Group records of ``index`` whose key is missing from ``other`` by name."""
    groups: Dict[str, List[PackageRecord]] = {}
    for name in index.names():
        unmatched = [r for r in index.records_named(name) if r.key not in other]
        if unmatched:
            groups[name] = unmatched
    return groups


def compare_locks(
    old_lock: LockFile,
    new_lock: LockFile,
    old_metadata: Optional[LockMetadata] = None,
    new_metadata: Optional[LockMetadata] = None
) -> ComparisonResult:
    """
    Compare two parsed lock files.

    Args:
        old_lock: Lock file before the change
        new_lock: Lock file after the change
        old_metadata: Metadata for the old lock file
        new_metadata: Metadata for the new lock file

    Returns:
        ComparisonResult containing all changes
    """
    logger.info(f"Comparing {len(old_lock.packages)} vs {len(new_lock.packages)} packages")
    start_time = time.time()

    if old_metadata is None:
        old_metadata = LockMetadata("old", len(old_lock.packages), old_lock.version)
    if new_metadata is None:
        new_metadata = LockMetadata("new", len(new_lock.packages), new_lock.version)

    changes = diff(PackageIndex.from_lock(old_lock), PackageIndex.from_lock(new_lock))

    counts = changes.counts()
    logger.info(
        f"Comparison completed in {time.time() - start_time:.3f}s: "
        f"{counts[ChangeKind.UPDATED]} updated, {counts[ChangeKind.ADDED]} added, "
        f"{counts[ChangeKind.REMOVED]} removed"
    )

    return ComparisonResult(
        old_metadata=old_metadata,
        new_metadata=new_metadata,
        changes=changes,
    )
