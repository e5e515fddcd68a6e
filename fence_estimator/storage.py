"""
Key-value storage area for the estimator.

Behaves like a browser's localStorage: string keys, string values, missing
keys read as None. Each write commits on its own.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from . import models

logger = logging.getLogger(__name__)


class KeyValueArea:
    """String-keyed persistent area scoped to one database."""

    def __init__(self, db: Session):
        self.db = db

    def get_item(self, key: str) -> Optional[str]:
        entry = self.db.query(models.StorageEntry).filter(models.StorageEntry.key == key).first()
        return entry.value if entry else None

    def set_item(self, key: str, value: str) -> None:
        entry = self.db.query(models.StorageEntry).filter(models.StorageEntry.key == key).first()
        if entry:
            entry.value = value
        else:
            self.db.add(models.StorageEntry(key=key, value=value))
        self.db.commit()
        logger.debug(f"Stored {len(value)} chars under {key!r}")

    def remove_item(self, key: str) -> None:
        entry = self.db.query(models.StorageEntry).filter(models.StorageEntry.key == key).first()
        if entry:
            self.db.delete(entry)
            self.db.commit()
