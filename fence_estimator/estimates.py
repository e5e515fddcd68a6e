"""
Estimate builder workflow — new, save, save as new, open, load active.

The form state lives in the client; these functions take what the form
submits (an EstimateDraft), price it, and persist it through a QuoteStore.
"""

import logging
import math
import time
import uuid
from datetime import datetime, timezone
from typing import Optional

from .models import QuoteStatus
from .pricing_engine import FencePricingEngine
from .quote_store import QuoteStore
from .schemas import Estimate, EstimateDraft, EstimateInputs, Totals

logger = logging.getLogger(__name__)


def uid(prefix: str = "q") -> str:
    """Opaque id, e.g. est_3f9c0a1b2d4e_1760870400000."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}_{int(time.time() * 1000)}"


def new_estimate_id() -> str:
    return uid("est")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def build_title(draft: EstimateDraft, total_lf: float) -> str:
    """Typed title, or "<customer or 'Estimate'> — <LF> LF" when left blank."""
    title = draft.title.strip()
    if title:
        return title
    name = draft.customer.name or "Estimate"
    return f"{name} — {_round_half_up(total_lf)} LF"


def preview_totals(inputs: EstimateInputs, engine: FencePricingEngine = None) -> Totals:
    """Live totals for the form. Nothing is stored."""
    engine = engine or FencePricingEngine()
    return Totals(**engine.calculate_totals(inputs))


def start_new_estimate(store: QuoteStore) -> str:
    """Fresh id for a blank form; it becomes the active quote."""
    estimate_id = new_estimate_id()
    store.set_active(estimate_id)
    return estimate_id


def save_estimate(store: QuoteStore, estimate_id: str, draft: EstimateDraft,
                  engine: FencePricingEngine = None) -> Estimate:
    """
    Price the draft and write it over any quote with the same id.

    createdAt and status survive a re-save; a first save is pending.
    """
    engine = engine or FencePricingEngine()
    totals = preview_totals(draft, engine)
    now = datetime.now(timezone.utc)

    existing = store.get_by_id(estimate_id)
    created_at = existing.created_at if existing else now
    status = existing.status if existing else QuoteStatus.PENDING

    fields = draft.model_dump(include=set(EstimateDraft.model_fields))
    fields["title"] = build_title(draft, totals.total_lf)
    estimate = Estimate(
        **fields,
        id=estimate_id,
        created_at=created_at,
        updated_at=now,
        status=status,
        totals=totals,
    )

    store.upsert(estimate)
    store.set_active(estimate.id)
    logger.info(
        f"Saved quote {estimate.id} ({'update' if existing else 'new'}): "
        f"{totals.total_lf:.0f} LF, total ${totals.total:,.2f}"
    )
    return estimate


def save_as_new(store: QuoteStore, draft: EstimateDraft,
                engine: FencePricingEngine = None) -> Estimate:
    """Fork the form into a brand-new quote with a fresh id."""
    return save_estimate(store, new_estimate_id(), draft, engine)


def open_estimate(store: QuoteStore, estimate_id: str) -> Optional[Estimate]:
    """Make a saved quote the active one. None if it does not exist."""
    estimate = store.get_by_id(estimate_id)
    if estimate is None:
        return None
    store.set_active(estimate.id)
    return estimate


def load_active(store: QuoteStore) -> Optional[Estimate]:
    """The quote the form should hydrate from, if any."""
    active_id = store.get_active()
    if not active_id:
        return None
    return store.get_by_id(active_id)
