from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional

from .. import schemas
from ..contact_links import quick_actions
from ..models import QuoteStatus
from ..quote_store import QuoteStore
from .estimates import get_store

router = APIRouter(prefix="/quotes", tags=["quotes"])

STATUS_FILTERS = ["all"] + [s.value for s in QuoteStatus]


@router.get("/", response_model=List[schemas.Estimate])
def list_quotes(status: Optional[str] = "all", store: QuoteStore = Depends(get_store)):
    """Saved quotes, newest first. status: all | pending | sold | void."""
    if status not in STATUS_FILTERS:
        raise HTTPException(
            status_code=400,
            detail=f"status must be one of {STATUS_FILTERS}, got {status}",
        )
    return store.list_by_status(None if status == "all" else QuoteStatus(status))


@router.get("/{quote_id}", response_model=schemas.Estimate)
def get_quote(quote_id: str, store: QuoteStore = Depends(get_store)):
    quote = store.get_by_id(quote_id)
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote


@router.patch("/{quote_id}/status", response_model=schemas.Estimate)
def update_quote_status(quote_id: str, update: schemas.StatusUpdate,
                        store: QuoteStore = Depends(get_store)):
    quote = store.set_status(quote_id, update.status)
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote


@router.delete("/{quote_id}")
def delete_quote(quote_id: str, store: QuoteStore = Depends(get_store)):
    """Delete a quote. Unknown ids are a no-op, not an error."""
    existed = store.get_by_id(quote_id) is not None
    store.remove(quote_id)
    return {"ok": True, "deleted": existed, "active_id": store.get_active()}


@router.get("/{quote_id}/links")
def get_quote_links(quote_id: str, store: QuoteStore = Depends(get_store)):
    """tel: / mailto: / sms: quick actions for the quote's customer."""
    quote = store.get_by_id(quote_id)
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quick_actions(quote)
