# src/fxsync/adapters/persistence/file_store.py
"""
File Store - Atomic JSON File Persistence

Low-level helpers used by the local store to read and write JSON documents.
Writes go to a temporary file in the same directory and are moved into
place with os.replace, so readers never see a half-written file. Corrupt
files are backed up next to the original and reported as missing.

Files that USE this module:
- fxsync.adapters.persistence.local_store (all persisted values)

Files that this module USES:
- None (stdlib only)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Optional

log = logging.getLogger(__name__)


def write_json_atomic(path: Path, data: Any) -> None:
    """
    Write ``data`` as JSON to ``path`` using temp file + atomic rename.

    Raises:
        OSError: If the file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_fd, temp_path = tempfile.mkstemp(suffix=".json.tmp", dir=str(path.parent), text=True)
    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, str(path))
    except BaseException:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def read_json(path: Path) -> Optional[Any]:
    """
    Read a JSON document, returning None if it is missing or unreadable.

    A file that fails to decode is copied to ``<name>.corrupt`` and removed.
    """
    if not path.exists():
        return None
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        backup_path = path.with_suffix(path.suffix + ".corrupt")
        try:
            shutil.copy2(path, backup_path)
            path.unlink()
            log.warning("Store file %s corrupted, backed up to %s: %s", path, backup_path, e)
        except OSError as backup_error:
            log.error("Failed to back up corrupt store file %s: %s", path, backup_error)
        return None
    except OSError as e:
        log.error("Unexpected error reading store file %s: %s", path, e)
        return None
