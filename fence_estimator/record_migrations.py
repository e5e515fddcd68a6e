"""
Upgrades for stored quote records.

Quotes are kept as raw JSON in the storage area, so the table schema never
changes when a field is added; the record does. Each record carries
schemaVersion; records written before versioning existed are version 1.
"""

import logging

from .config import settings
from .schemas import SCHEMA_VERSION

logger = logging.getLogger(__name__)


def _v1_to_v2(record: dict) -> dict:
    """Fill defaults for fields v1 records may lack; add calendar dates."""
    defaults = {
        "status": "pending",
        "title": "",
        "notes": "",
        "segments": [],
        "corners": 0,
        "heightFt": 6,
        "material": "wood",
        "woodType": "pt",
        "postSize": "4x4",
        "slope": False,
        "rocky": False,
        "gatesWalk": 0,
        "gatesDouble": 0,
        "materialMarkupPct": settings.MATERIAL_MARKUP_DEFAULT,
        "equipmentFee": settings.EQUIPMENT_FEE_DEFAULT,
        "deliveryFee": settings.DELIVERY_FEE_DEFAULT,
        "disposalFee": settings.DISPOSAL_FEE_DEFAULT,
    }
    for key, value in defaults.items():
        if record.get(key) is None:
            record[key] = value

    customer = record.get("customer")
    if not isinstance(customer, dict):
        customer = {}
    record["customer"] = {
        field: customer.get(field) or ""
        for field in ("name", "phone", "email", "address")
    }

    # v1 stamped createdAt on every save; keep what is there
    if not record.get("updatedAt"):
        record["updatedAt"] = record.get("createdAt")

    record.setdefault("startDate", None)
    record.setdefault("endDate", None)
    return record


# from_version -> step producing from_version + 1
MIGRATIONS = {
    1: _v1_to_v2,
}


def record_version(record: dict) -> int:
    """Stored schemaVersion. Anything that is not an int of at least 1 reads as 1."""
    version = record.get("schemaVersion")
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        return 1
    return version


def upgrade_record(record: dict) -> dict:
    """
    Bring one stored record up to SCHEMA_VERSION.

    Records from a newer version are returned untouched.
    """
    record = dict(record)
    version = record_version(record)
    if version > SCHEMA_VERSION:
        logger.warning(
            f"Quote {record.get('id')!r} has schemaVersion {version}, "
            f"newer than {SCHEMA_VERSION}, reading as-is"
        )
        return record

    while version < SCHEMA_VERSION:
        record = MIGRATIONS[version](record)
        version += 1
        record["schemaVersion"] = version
    return record
