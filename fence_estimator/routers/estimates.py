from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..estimates import (
    load_active, open_estimate, preview_totals, save_as_new, save_estimate,
    start_new_estimate,
)
from ..quote_store import QuoteStore

router = APIRouter(prefix="/estimates", tags=["estimates"])


def get_store(db: Session = Depends(get_db)) -> QuoteStore:
    return QuoteStore(db)


@router.post("/price", response_model=schemas.Totals)
def price_estimate(inputs: schemas.EstimateInputs):
    """Live totals while the form is being filled in. Nothing is saved."""
    return preview_totals(inputs)


@router.post("/new")
def new_estimate(store: QuoteStore = Depends(get_store)):
    """Start a blank estimate. The fresh id becomes the active quote."""
    return {"id": start_new_estimate(store)}


@router.get("/active")
def get_active_estimate(store: QuoteStore = Depends(get_store)):
    """Quote the form should load on open. estimate is null when there is none."""
    estimate = load_active(store)
    return {
        "active_id": store.get_active(),
        "estimate": estimate.model_dump(mode="json", by_alias=True) if estimate else None,
    }


@router.put("/active", response_model=schemas.Estimate)
def set_active_estimate(request: schemas.ActiveRequest, store: QuoteStore = Depends(get_store)):
    """Open a saved quote in the estimator."""
    estimate = open_estimate(store, request.id)
    if not estimate:
        raise HTTPException(status_code=404, detail="Quote not found")
    return estimate


@router.post("/save-as-new", response_model=schemas.Estimate)
def save_estimate_as_new(draft: schemas.EstimateDraft, store: QuoteStore = Depends(get_store)):
    return save_as_new(store, draft)


@router.put("/{estimate_id}", response_model=schemas.Estimate)
def save_estimate_by_id(estimate_id: str, draft: schemas.EstimateDraft,
                        store: QuoteStore = Depends(get_store)):
    """Save the form over the quote with this id (or create it)."""
    return save_estimate(store, estimate_id, draft)
