"""
Lock Diff - dependency lock file comparison tool.

A tool for comparing two Cargo-style lock files and reporting which packages
were added, removed, upgraded, or re-pinned between them.
"""

__version__ = "0.1.0"

from . import models
from .lock_parser import LockParser, LockParseError
from .package_index import PackageIndex
from .lock_differ import diff, compare_locks
from .renderer import render

__all__ = [
    "models",
    "LockParser",
    "LockParseError",
    "PackageIndex",
    "diff",
    "compare_locks",
    "render",
    "__version__",
]
