"""Persistence for discovered updates.

Records are keyed by package name: storing a record for a package replaces
whatever was stored for it before.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional

from versioning.models import UpdateRecord

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class UpdateStore(ABC):
    """Upsert-by-package storage for UpdateRecord."""

    @abstractmethod
    def upsert(self, record: UpdateRecord) -> UpdateRecord:
        """Create or replace the record for ``record.package``."""

    @abstractmethod
    def get(self, package: str) -> Optional[UpdateRecord]:
        """Return the stored record for ``package`` if any."""

    @abstractmethod
    def all(self) -> List[UpdateRecord]:
        """Return every stored record."""


class InMemoryUpdateStore(UpdateStore):
    """Keeps records for the lifetime of the process."""

    def __init__(self) -> None:
        self._records: Dict[str, UpdateRecord] = {}

    def upsert(self, record: UpdateRecord) -> UpdateRecord:
        if record.checked_at is None:
            record.checked_at = _now_iso()
        self._records[record.package] = record
        return record

    def get(self, package: str) -> Optional[UpdateRecord]:
        return self._records.get(package)

    def all(self) -> List[UpdateRecord]:
        return list(self._records.values())


class JsonUpdateStore(InMemoryUpdateStore):
    """Update history kept in a JSON file, rewritten on every upsert.

    An unreadable history file is logged and treated as empty; it is replaced
    on the next write.
    """

    def __init__(self, path: str) -> None:
        super().__init__()
        self.path = path
        self._load()

    def _load(self) -> None:
        if not os.path.isfile(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                data = json.load(file)
        except (OSError, ValueError) as e:
            logger.warning("Couldn't read update history %s: %s", self.path, e)
            return
        if not isinstance(data, list):
            logger.warning("Update history %s is not a list, ignoring it", self.path)
            return
        for item in data:
            if isinstance(item, dict) and item.get("package"):
                record = UpdateRecord.from_dict(item)
                self._records[record.package] = record

    def _save(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as file:
            json.dump([r.to_dict() for r in self.all()], file, ensure_ascii=False, indent=4)

    def upsert(self, record: UpdateRecord) -> UpdateRecord:
        record = super().upsert(record)
        self._save()
        logger.debug("Stored update for %s in %s", record.package, self.path)
        return record
