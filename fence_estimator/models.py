from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime
from .database import Base
import enum


# --- Enums (stored inside quote records as their string values) ---

class QuoteStatus(str, enum.Enum):
    PENDING = "pending"
    SOLD = "sold"
    VOID = "void"


class Material(str, enum.Enum):
    WOOD = "wood"
    VINYL = "vinyl"
    CHAIN = "chain"


class WoodType(str, enum.Enum):
    PRESSURE_TREATED = "pt"
    CEDAR = "cedar"
    CEDARTONE = "cedartone"


class PostSize(str, enum.Enum):
    FOUR_BY_FOUR = "4x4"
    SIX_BY_SIX = "6x6"


# --- Tables ---

class StorageEntry(Base):
    """
    Device-local key-value area. One row per key; values are opaque strings.

    Quotes live as a single JSON array under one key, the active quote id
    under another. Rows are committed independently.
    """
    __tablename__ = "storage_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
