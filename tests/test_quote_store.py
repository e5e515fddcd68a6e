"""
Quote store tests — storage area, upsert/get/remove, active pointer, fail-soft reads.

Tests:
1-4.   Upsert ordering and whole-record replace
5-7.   Remove and the active pointer
8-10.  Status changes and filtering
11-18. Malformed storage reads as empty or is skipped
19-20. Record migrations (v1 → v2)
"""

import json
from datetime import datetime, timezone

from fence_estimator.models import QuoteStatus
from fence_estimator.quote_store import QuoteStore
from fence_estimator.record_migrations import upgrade_record
from fence_estimator.schemas import SCHEMA_VERSION, Customer, Estimate, Segment, Totals
from fence_estimator.storage import KeyValueArea
from fence_estimator.config import settings


# --- Test fixtures ---

def _sample_quote(quote_id="est_1", name="Smith", length=164.0, **overrides):
    now = datetime(2024, 10, 1, 15, 30, tzinfo=timezone.utc)
    fields = dict(
        id=quote_id,
        created_at=now,
        updated_at=now,
        title=f"{name} — {round(length)} LF",
        customer=Customer(name=name, phone="(555) 010-2000", email="smith@example.com",
                          address="12 Oak Ln"),
        segments=[Segment(id="seg_a", name="A-B", length_ft=length)],
        totals=Totals(total_lf=length, labor_hours=12.67, labor_cost=950.0,
                      material_cost=4920.0, total=6570.0),
    )
    fields.update(overrides)
    return Estimate(**fields)


def _v1_record():
    """A record as the first release stored it: no schemaVersion, sparse fields."""
    return {
        "id": "est_legacy_1",
        "createdAt": "2025-05-02T14:00:00.000Z",
        "updatedAt": "2025-05-02T14:00:00.000Z",
        "status": "sold",
        "title": "Jones — 80 LF",
        "notes": "",
        "customer": {"name": "Jones", "phone": "", "email": "", "address": ""},
        "segments": [{"id": "seg_x", "name": "A-B", "lengthFt": 80},
                     {"id": "seg_y", "name": "B-C", "lengthFt": None}],
        "corners": 1,
        "heightFt": 6,
        "material": "vinyl",
        "woodType": "pt",
        "postSize": "4x4",
        "slope": False,
        "rocky": True,
        "gatesWalk": 1,
        "gatesDouble": 0,
        "materialMarkupPct": 0.2,
        "equipmentFee": None,
        "totals": {"totalLf": 80, "laborHours": 8.17, "laborCost": 612.75,
                   "materialCost": 4032, "total": 5344.75},
    }


# ============================================================
# 1-4. Upsert
# ============================================================

def test_empty_store_lists_nothing(store):
    assert store.list_all() == []
    assert store.get_by_id("est_missing") is None
    assert store.get_active() == ""


def test_upsert_then_get_returns_equal_record(store):
    quote = _sample_quote()
    store.upsert(quote)
    assert store.get_by_id("est_1") == quote


def test_upsert_replaces_whole_record(store):
    store.upsert(_sample_quote(notes="first visit", corners=3))
    replacement = _sample_quote(notes="", title="Revised")
    store.upsert(replacement)

    fetched = store.get_by_id("est_1")
    assert fetched == replacement
    assert fetched.corners == 0  # not merged from the earlier version
    assert len(store.list_all()) == 1


def test_new_quotes_prepend_updates_keep_position(store):
    store.upsert(_sample_quote("est_a"))
    store.upsert(_sample_quote("est_b"))
    store.upsert(_sample_quote("est_c"))
    assert [q.id for q in store.list_all()] == ["est_c", "est_b", "est_a"]

    store.upsert(_sample_quote("est_a", notes="updated"))
    assert [q.id for q in store.list_all()] == ["est_c", "est_b", "est_a"]


def test_stored_json_uses_camel_case(store, db):
    store.upsert(_sample_quote())
    raw = json.loads(KeyValueArea(db).get_item(settings.ESTIMATES_KEY))
    record = raw[0]
    assert record["schemaVersion"] == SCHEMA_VERSION
    assert record["segments"][0]["lengthFt"] == 164.0
    assert record["totals"]["totalLf"] == 164.0
    assert record["materialMarkupPct"] == 0.2
    assert record["postSize"] == "4x4"


# ============================================================
# 5-7. Remove and the active pointer
# ============================================================

def test_remove_then_get_is_absent(store):
    store.upsert(_sample_quote("est_a"))
    store.upsert(_sample_quote("est_b"))
    store.remove("est_a")
    assert store.get_by_id("est_a") is None
    assert [q.id for q in store.list_all()] == ["est_b"]


def test_remove_unknown_id_is_noop(store):
    store.upsert(_sample_quote())
    store.set_active("est_1")
    store.remove("est_nope")
    assert len(store.list_all()) == 1
    assert store.get_active() == "est_1"


def test_removing_active_quote_clears_pointer(store, db):
    store.upsert(_sample_quote("est_a"))
    store.upsert(_sample_quote("est_b"))

    store.set_active("est_b")
    store.remove("est_a")
    assert store.get_active() == "est_b"

    store.remove("est_b")
    assert store.get_active() == ""
    assert KeyValueArea(db).get_item(settings.ACTIVE_ESTIMATE_KEY) is None


# ============================================================
# 8-10. Status
# ============================================================

def test_set_status_changes_status_and_updated_at(store):
    original = _sample_quote()
    store.upsert(original)

    updated = store.set_status("est_1", QuoteStatus.SOLD)
    assert updated.status == QuoteStatus.SOLD
    assert updated.updated_at > original.updated_at
    assert updated.created_at == original.created_at
    assert store.get_by_id("est_1").status == QuoteStatus.SOLD


def test_set_status_unknown_id_returns_none(store):
    assert store.set_status("est_missing", "void") is None


def test_list_by_status(store):
    store.upsert(_sample_quote("est_a"))
    store.upsert(_sample_quote("est_b", status=QuoteStatus.SOLD))
    store.upsert(_sample_quote("est_c", status=QuoteStatus.VOID))

    assert [q.id for q in store.list_by_status(QuoteStatus.SOLD)] == ["est_b"]
    assert [q.id for q in store.list_by_status("pending")] == ["est_a"]
    assert len(store.list_by_status(None)) == 3


# ============================================================
# 11-18. Fail-soft reads
# ============================================================

def test_corrupt_json_reads_as_empty(store, db):
    KeyValueArea(db).set_item(settings.ESTIMATES_KEY, "{not json")
    assert store.list_all() == []
    assert store.get_by_id("est_1") is None


def test_non_list_payload_reads_as_empty(store, db):
    KeyValueArea(db).set_item(settings.ESTIMATES_KEY, json.dumps({"id": "est_1"}))
    assert store.list_all() == []


def test_malformed_records_are_skipped(store, db):
    good = _sample_quote().model_dump(mode="json", by_alias=True)
    bad = {"id": "est_bad", "createdAt": "yesterday-ish", "schemaVersion": SCHEMA_VERSION}
    KeyValueArea(db).set_item(settings.ESTIMATES_KEY, json.dumps([bad, "junk", good]))
    assert [q.id for q in store.list_all()] == ["est_1"]


def test_out_of_range_schema_version_reads_as_v1(store, db):
    zero = dict(_v1_record(), id="est_zero", schemaVersion=0)
    negative = dict(_v1_record(), id="est_negative", schemaVersion=-1)
    flagged = dict(_v1_record(), id="est_flagged", schemaVersion=True)
    KeyValueArea(db).set_item(settings.ESTIMATES_KEY, json.dumps([zero, negative, flagged]))
    quotes = store.list_all()
    assert [q.id for q in quotes] == ["est_zero", "est_negative", "est_flagged"]
    assert all(q.schema_version == SCHEMA_VERSION for q in quotes)


def test_bare_records_with_bad_version_are_skipped(store, db):
    KeyValueArea(db).set_item(settings.ESTIMATES_KEY, json.dumps([{"id": "x", "schemaVersion": 0}]))
    assert store.list_all() == []


def test_non_object_customer_is_replaced(store, db):
    record = dict(_v1_record(), customer="Smith")
    KeyValueArea(db).set_item(settings.ESTIMATES_KEY, json.dumps([record]))
    quote = store.get_by_id("est_legacy_1")
    assert quote is not None
    assert quote.customer == Customer(name="", phone="", email="", address="")


def test_store_stays_writable_after_bad_records(store, db):
    bad = [{"id": "x", "customer": "Smith"}, {"id": "y", "schemaVersion": -1}]
    KeyValueArea(db).set_item(settings.ESTIMATES_KEY, json.dumps(bad))
    store.upsert(_sample_quote())
    store.remove("x")
    assert [q.id for q in store.list_all()] == ["est_1"]


def test_upsert_recovers_corrupt_storage(store, db):
    KeyValueArea(db).set_item(settings.ESTIMATES_KEY, "[[[")
    store.upsert(_sample_quote())
    assert [q.id for q in store.list_all()] == ["est_1"]


def test_separate_keys_are_independent(db):
    """Two stores on different keys don't see each other's quotes."""
    first = QuoteStore(db, estimates_key="a_quotes", active_key="a_active")
    second = QuoteStore(db, estimates_key="b_quotes", active_key="b_active")
    first.upsert(_sample_quote())
    first.set_active("est_1")
    assert second.list_all() == []
    assert second.get_active() == ""


# ============================================================
# 19-20. Record migrations
# ============================================================

def test_upgrade_v1_record_fills_defaults():
    record = upgrade_record(_v1_record())
    assert record["schemaVersion"] == SCHEMA_VERSION
    assert record["equipmentFee"] == settings.EQUIPMENT_FEE_DEFAULT
    assert record["deliveryFee"] == settings.DELIVERY_FEE_DEFAULT
    assert record["disposalFee"] == settings.DISPOSAL_FEE_DEFAULT
    assert record["startDate"] is None
    assert record["endDate"] is None
    # Fields that were present are kept
    assert record["material"] == "vinyl"
    assert record["status"] == "sold"


def test_v1_records_load_through_store(store, db):
    KeyValueArea(db).set_item(settings.ESTIMATES_KEY, json.dumps([_v1_record()]))
    quote = store.get_by_id("est_legacy_1")
    assert quote is not None
    assert quote.status == QuoteStatus.SOLD
    assert quote.segments[1].length_ft is None
    assert quote.totals.total == 5344.75  # stored snapshot, not recomputed
    assert quote.schema_version == SCHEMA_VERSION


def test_newer_records_pass_through_untouched():
    record = dict(_v1_record(), schemaVersion=SCHEMA_VERSION + 1)
    assert upgrade_record(record) == record
