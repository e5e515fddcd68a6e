"""
Quote store — saved estimates plus the active-quote pointer.

All quotes live as one JSON array under settings.ESTIMATES_KEY; the id of
the quote last opened or saved lives under settings.ACTIVE_ESTIMATE_KEY.
Reads never raise: missing or malformed data reads as empty.
"""

import json
import logging
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from .config import settings
from .models import QuoteStatus
from .record_migrations import upgrade_record
from .schemas import Estimate
from .storage import KeyValueArea

logger = logging.getLogger(__name__)


class QuoteStore:
    """Durable id -> quote mapping with a separately stored active id."""

    def __init__(self, db: Session, estimates_key: str = None, active_key: str = None):
        self.area = KeyValueArea(db)
        self.estimates_key = estimates_key or settings.ESTIMATES_KEY
        self.active_key = active_key or settings.ACTIVE_ESTIMATE_KEY

    # --- Quote list ---

    def list_all(self) -> List[Estimate]:
        """
        All saved quotes. New quotes come first; updated quotes keep their slot.
        """
        raw = self.area.get_item(self.estimates_key)
        if not raw:
            return []
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Stored quotes under {self.estimates_key!r} are not valid JSON: {e}")
            return []
        if not isinstance(records, list):
            logger.warning(f"Stored quotes under {self.estimates_key!r} are not a list, ignoring")
            return []

        quotes = []
        for record in records:
            if not isinstance(record, dict):
                logger.warning(f"Skipping non-object quote record: {record!r}")
                continue
            try:
                quotes.append(Estimate.model_validate(upgrade_record(record)))
            except ValidationError as e:
                logger.warning(f"Skipping malformed quote {record.get('id')!r}: {e.error_count()} errors")
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping malformed quote {record.get('id')!r}: {e!r}")
        return quotes

    def save_all(self, quotes: List[Estimate]) -> None:
        payload = [q.model_dump(mode="json", by_alias=True) for q in quotes]
        self.area.set_item(self.estimates_key, json.dumps(payload))

    def list_by_status(self, status=None) -> List[Estimate]:
        """List filter. status None means every quote."""
        quotes = self.list_all()
        if status is None:
            return quotes
        return [q for q in quotes if q.status == status]

    def upsert(self, quote: Estimate) -> None:
        """Replace the quote with the same id, or insert it at the front."""
        quotes = self.list_all()
        for idx, existing in enumerate(quotes):
            if existing.id == quote.id:
                quotes[idx] = quote
                break
        else:
            quotes.insert(0, quote)
        self.save_all(quotes)

    def get_by_id(self, quote_id: str) -> Optional[Estimate]:
        for quote in self.list_all():
            if quote.id == quote_id:
                return quote
        return None

    def remove(self, quote_id: str) -> None:
        """Delete a quote if present; clear the active pointer if it named it."""
        quotes = self.list_all()
        remaining = [q for q in quotes if q.id != quote_id]
        self.save_all(remaining)
        if self.get_active() == quote_id:
            self.area.remove_item(self.active_key)
        if len(remaining) != len(quotes):
            logger.info(f"Deleted quote {quote_id}")

    def set_status(self, quote_id: str, status) -> Optional[Estimate]:
        """Inline status change from the quote list. Returns None if not found."""
        quotes = self.list_all()
        for idx, existing in enumerate(quotes):
            if existing.id == quote_id:
                updated = existing.model_copy(update={
                    "status": QuoteStatus(status),
                    "updated_at": datetime.now(timezone.utc),
                })
                quotes[idx] = updated
                self.save_all(quotes)
                logger.info(f"Quote {quote_id} status -> {updated.status.value}")
                return updated
        return None

    # --- Active pointer ---

    def set_active(self, quote_id: str) -> None:
        self.area.set_item(self.active_key, quote_id or "")

    def get_active(self) -> str:
        return self.area.get_item(self.active_key) or ""
