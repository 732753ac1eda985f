"""
Lock file parser module for loading and parsing Cargo-style lock files.

This module reads TOML lock files and converts their ``[[package]]`` entries
into our internal PackageRecord representation.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from .models import LockFile, LockMetadata, PackageRecord

logger = logging.getLogger(__name__)


class LockParseError(ValueError):
    """Raised when a lock file cannot be read or does not look like a lock file."""


def is_valid_lock_file(filepath: str) -> bool:
    """
    Check if a path points at a readable regular file.

    Args:
        filepath: Path to check

    Returns:
        True if the file can be handed to the parser
    """
    path = Path(filepath)
    if not path.is_file():
        return False

    return os.access(path, os.R_OK)


def _optional_str(entry: Dict[str, Any], field_name: str, where: str) -> Optional[str]:
    value = entry.get(field_name)
    if value is not None and not isinstance(value, str):
        raise LockParseError(f"{where}: '{field_name}' must be a string")
    return value


def _parse_package(entry: Any, where: str) -> PackageRecord:
    if not isinstance(entry, dict):
        raise LockParseError(f"{where}: expected a table")

    for required in ('name', 'version'):
        if required not in entry:
            raise LockParseError(f"{where}: missing '{required}'")
        if not isinstance(entry[required], str):
            raise LockParseError(f"{where}: '{required}' must be a string")

    dependencies = entry.get('dependencies', [])
    if not isinstance(dependencies, list) or not all(isinstance(d, str) for d in dependencies):
        raise LockParseError(f"{where}: 'dependencies' must be a list of strings")

    return PackageRecord(
        name=entry['name'],
        version=entry['version'],
        source=_optional_str(entry, 'source', where),
        checksum=_optional_str(entry, 'checksum', where),
        dependencies=tuple(dependencies),
    )


class LockParser:
    """
    Parser for lock files.

    Handles loading and parsing of TOML lock files, converting the package
    entries into records while keeping their file order.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def parse_text(self, text: str, origin: str = "<string>") -> LockFile:
        """
        Parse lock file contents.

        Args:
            text: TOML document
            origin: Name used in error messages

        Returns:
            Parsed LockFile

        Raises:
            LockParseError: If the text is not a well-formed lock file
        """
        try:
            document = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise LockParseError(f"{origin}: invalid TOML: {e}") from e

        version = document.get('version')
        if version is not None and (isinstance(version, bool) or not isinstance(version, int)):
            raise LockParseError(f"{origin}: 'version' must be an integer")

        entries = document.get('package', [])
        if not isinstance(entries, list):
            raise LockParseError(f"{origin}: 'package' must be an array of tables")

        packages = tuple(
            _parse_package(entry, f"{origin}: package #{i + 1}")
            for i, entry in enumerate(entries)
        )

        return LockFile(version=version, packages=packages)

    def load_lock(self, filepath: str) -> LockFile:
        """
        Read and parse a lock file from disk.

        Args:
            filepath: Path to the lock file

        Returns:
            Parsed LockFile

        Raises:
            LockParseError: If the file cannot be read or parsed
        """
        self.logger.info(f"Starting to parse {filepath}")

        try:
            text = Path(filepath).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise LockParseError(f"{filepath}: cannot read file: {e}") from e

        lock = self.parse_text(text, origin=str(filepath))
        self.logger.info(f"Successfully parsed {len(lock.packages)} packages from {filepath}")
        return lock

    def extract_metadata(self, lock: LockFile, filepath: str) -> LockMetadata:
        """
        Extract summary metadata for a parsed lock file.

        Args:
            lock: Parsed lock file
            filepath: Path to the original lock file

        Returns:
            LockMetadata object with file statistics

        Raises:
            LockParseError: If the file size cannot be read
        """
        try:
            file_size = os.path.getsize(filepath)
        except OSError as e:
            raise LockParseError(f"{filepath}: cannot stat file: {e}") from e

        return LockMetadata(
            filename=os.path.basename(filepath),
            package_count=len(lock.packages),
            lock_version=lock.version,
            file_size=file_size,
        )
