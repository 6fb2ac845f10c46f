"""Lockfile parser for Composer (composer.lock).

Only the runtime ``packages`` section is read; ``packages-dev`` entries are
never reported as installed.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from versioning.models import ComposerLock, LockEntry

logger = logging.getLogger(__name__)


def _lock_entry(pkg: Dict[str, Any]) -> LockEntry:
    source = pkg.get("source")
    reference = source.get("reference") if isinstance(source, dict) else None
    return LockEntry(
        name=str(pkg["name"]),
        version=str(pkg.get("version", "")),
        source_reference=reference,
    )


def parse_composer_lock(lockfile_path: str) -> ComposerLock:
    """Read composer.lock into a ComposerLock.

    A missing or malformed lockfile yields an empty ComposerLock so the run
    has nothing to check.

    Args:
        lockfile_path: Path to composer.lock file

    Returns:
        ComposerLock keyed by package name, in lockfile order
    """
    try:
        with open(lockfile_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        logger.warning("composer.lock file not found: %s", e)
        return ComposerLock()
    except IOError as e:
        logger.warning("Failed to read composer.lock file: %s", e)
        return ComposerLock()
    except ValueError as e:
        logger.warning("Failed to parse composer.lock (invalid JSON): %s", e)
        return ComposerLock()

    lock = ComposerLock()
    package_list = data.get("packages", []) if isinstance(data, dict) else []
    if not isinstance(package_list, list):
        logger.warning("composer.lock has no usable packages section")
        return lock

    for pkg in package_list:
        if isinstance(pkg, dict) and pkg.get("name"):
            entry = _lock_entry(pkg)
            lock.packages[entry.name] = entry

    logger.debug("Read %d locked packages from %s", len(lock.packages), lockfile_path)
    return lock
