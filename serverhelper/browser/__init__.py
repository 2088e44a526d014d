"""Backup-file browser model.

This package contains non-UI browser primitives:
- entry datatypes (parent marker, subdirectory, matching file)
- best-effort directory listing filtered to one file suffix
- the cursor-owning browser used by the dashboard state machine
"""

from __future__ import annotations

from .types import BrowserEntry, DirectoryEntry, FileEntry, ParentEntry
from .fs import BACKUP_FILE_SUFFIX, list_browser_entries, parent_directory, suffix_matches
from .model import DirectoryBrowser

__all__ = [
    "BrowserEntry",
    "DirectoryEntry",
    "FileEntry",
    "ParentEntry",
    "BACKUP_FILE_SUFFIX",
    "list_browser_entries",
    "parent_directory",
    "suffix_matches",
    "DirectoryBrowser",
]
