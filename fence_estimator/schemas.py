"""
Quote record schema.

Python attributes are snake_case; the stored and wire JSON uses camelCase
(lengthFt, heightFt, materialMarkupPct, ...).
"""

import math
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from .config import settings
from .models import Material, PostSize, QuoteStatus, WoodType

SCHEMA_VERSION = 2


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Segment(CamelModel):
    """One straight run of fence. length_ft is None until measured."""
    id: str
    name: str = ""
    length_ft: Optional[float] = None

    @field_validator("length_ft", mode="before")
    @classmethod
    def _blank_length(cls, value):
        if value is None or value == "":
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return number if math.isfinite(number) else None


class Customer(CamelModel):
    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""


class Totals(CamelModel):
    total_lf: float = 0.0
    labor_hours: float = 0.0
    labor_cost: float = 0.0
    material_cost: float = 0.0
    total: float = 0.0


class EstimateInputs(CamelModel):
    """Everything the pricing engine reads."""
    segments: List[Segment] = []
    corners: int = 0
    height_ft: float = 6.0
    material: Material = Material.WOOD
    wood_type: WoodType = WoodType.PRESSURE_TREATED
    post_size: PostSize = PostSize.FOUR_BY_FOUR
    slope: bool = False
    rocky: bool = False
    gates_walk: float = 0
    gates_double: float = 0

    material_markup_pct: float = Field(default_factory=lambda: settings.MATERIAL_MARKUP_DEFAULT)
    equipment_fee: float = Field(default_factory=lambda: settings.EQUIPMENT_FEE_DEFAULT)
    delivery_fee: float = Field(default_factory=lambda: settings.DELIVERY_FEE_DEFAULT)
    disposal_fee: float = Field(default_factory=lambda: settings.DISPOSAL_FEE_DEFAULT)

    @field_validator(
        "corners", "height_ft", "material", "wood_type", "post_size", "slope", "rocky",
        "gates_walk", "gates_double", "material_markup_pct", "equipment_fee",
        "delivery_fee", "disposal_fee",
        mode="before",
    )
    @classmethod
    def _null_to_default(cls, value, info):
        # Unentered numbers come back from storage as null
        if value is None:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)
        return value


class EstimateDraft(EstimateInputs):
    """What the estimate form submits on save."""
    title: str = ""
    notes: str = ""
    customer: Customer = Field(default_factory=Customer)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class Estimate(EstimateDraft):
    """A saved quote. totals is the snapshot taken at save time."""
    id: str
    created_at: datetime
    updated_at: datetime
    status: QuoteStatus = QuoteStatus.PENDING
    totals: Totals = Field(default_factory=Totals)
    schema_version: int = SCHEMA_VERSION


class StatusUpdate(BaseModel):
    status: QuoteStatus


class ActiveRequest(BaseModel):
    id: str
