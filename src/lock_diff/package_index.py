"""
Package index over the records of one lock file.

Groups records by identity key and by name so the differ can look up exact
matches as well as every version of a package.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Tuple

from .models import LockFile, PackageRecord

logger = logging.getLogger(__name__)


class PackageIndex:
    """
    Immutable lookup structure over a sequence of package records.

    If two input records share an identity key the later one wins. Lock files
    should never contain such duplicates, but an index is still produced
    rather than refusing the whole snapshot.
    """

    def __init__(self, records: Iterable[PackageRecord] = ()):
        by_key: Dict[Tuple[str, str], PackageRecord] = {}

        for record in records:
            if record.key in by_key:
                logger.debug(f"Duplicate package {record.name} {record.version}, keeping last entry")
            by_key[record.key] = record

        by_name: Dict[str, List[PackageRecord]] = {}
        for record in by_key.values():
            by_name.setdefault(record.name, []).append(record)

        self._by_key = MappingProxyType(by_key)
        self._by_name = MappingProxyType(
            {name: tuple(group) for name, group in by_name.items()}
        )
        # dicts keep first-insertion order, so this is the input order
        self._order = tuple(by_key)

    @classmethod
    def from_lock(cls, lock: LockFile) -> 'PackageIndex':
        return cls(lock.packages)

    def get(self, name: str, version: str) -> PackageRecord:
        """
        Look up a record by exact identity key.

        Raises:
            KeyError: If no record has this name and version
        """
        return self._by_key[(name, version)]

    def records_named(self, name: str) -> Tuple[PackageRecord, ...]:
        """All records sharing a name, in input order. Empty if none."""
        return self._by_name.get(name, ())

    def names(self) -> List[str]:
        """Distinct package names, sorted."""
        return sorted(self._by_name)

    def keys(self) -> Tuple[Tuple[str, str], ...]:
        """Identity keys in input order."""
        return self._order

    def records(self) -> List[PackageRecord]:
        """Records in input order."""
        return [self._by_key[key] for key in self._order]

    def __contains__(self, key) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[PackageRecord]:
        return iter(self.records())

    def __len__(self) -> int:
        return len(self._by_key)

    def __repr__(self) -> str:
        return f"PackageIndex({len(self)} packages)"
