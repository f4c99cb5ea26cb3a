from __future__ import annotations

import logging

import pytest

from leadhub.core.exceptions import DatabaseError, NotFoundError
from leadhub.importing.allocation import Allocation
from leadhub.importing.assignment import AssignableUser
from leadhub.importing.dedup import LeadIdentity
from leadhub.importing.orchestrator import (
    MISSING_FULL_NAME,
    DistributionSettings,
    ImportOrchestrator,
    build_lead_values,
)
from leadhub.schemas.imports import LeadRow


class FakeDirectory:
    def __init__(self, users=None, settings=None, known=("t1",)):
        self.users = list(users or [])
        self.settings = settings or DistributionSettings()
        self.known = set(known)

    def ensure_tenant(self, tenant_id):
        if tenant_id not in self.known:
            raise NotFoundError(f"Broker not found: {tenant_id}")

    def list_assignable_users(self, tenant_id):
        return self.users

    def get_distribution_settings(self, tenant_id):
        return self.settings


class FakeStore:
    def __init__(self, existing=None, counter=0, fail_batches=(), fail_rows=(), fail_counter=False):
        self.existing = list(existing or [])
        self.counter = counter
        self.fail_batches = set(fail_batches)
        self.fail_rows = set(fail_rows)
        self.fail_counter = fail_counter
        self.inserted: list[dict] = []
        self.batch_calls = 0
        self.saved_counters: list[int] = []
        self.records = []

    def existing_identities(self, tenant_id):
        return self.existing

    def insert_leads(self, leads):
        if len(leads) > 1:
            self.batch_calls += 1
            if self.batch_calls in self.fail_batches:
                raise DatabaseError("batch rejected")
        for values in leads:
            if values["full_name"] in self.fail_rows:
                raise DatabaseError(f"row rejected: {values['full_name']}")
        self.inserted.extend(leads)

    def load_counter(self, tenant_id):
        return self.counter

    def save_counter(self, tenant_id, counter):
        if self.fail_counter:
            raise DatabaseError("counter write failed")
        self.saved_counters.append(counter)

    def record_import(self, summary):
        self.records.append(summary)
        return "import-1"


OWNER = AssignableUser(user_id="u1", email="owner@broker.com", name="Owner One")


def test_three_row_import_with_error_and_duplicate():
    store = FakeStore()
    orchestrator = ImportOrchestrator(FakeDirectory(users=[OWNER]), store)
    rows = [
        LeadRow(full_name="Jane Doe", email="jane@x.com", status="Approved", tags="hot, vip"),
        LeadRow(full_name="", email="a@x.com"),
        LeadRow(full_name="Jane Again", email="JANE@x.com"),
    ]

    result = orchestrator.run_import("t1", "leads.csv", rows)

    assert result.success is True
    assert (result.imported_count, result.skipped_count, result.error_count) == (1, 1, 1)
    assert [error.model_dump() for error in result.errors] == [{"row": 3, "message": MISSING_FULL_NAME}]
    [jane] = store.inserted
    assert jane["full_name"] == "Jane Doe"
    assert (jane["status"], jane["sub_status"]) == ("pending", "approved")
    assert jane["tags"] == ["hot", "vip"]
    assert jane["assigned_to"] is None
    assert store.saved_counters == []
    assert store.records[0].total_rows == 3
    assert store.records[0].errors == [{"row": 3, "message": MISSING_FULL_NAME}]


def test_duplicates_against_existing_and_within_file_are_skipped():
    store = FakeStore(existing=[LeadIdentity(email="old@x.com")])
    rows = [
        LeadRow(full_name="Old Lead", email="OLD@x.com"),
        LeadRow(full_name="New Lead", email="new@x.com", external_id="E-1"),
        LeadRow(full_name="Same Ext", external_id="e-1"),
    ]

    result = ImportOrchestrator(FakeDirectory(), store).run_import("t1", "f.csv", rows)

    assert (result.imported_count, result.skipped_count, result.error_count) == (1, 2, 0)
    assert [lead["full_name"] for lead in store.inserted] == ["New Lead"]


def test_counts_always_add_up_to_total_rows():
    rows = [LeadRow(full_name=name, email=f"{name}@x.com") for name in ("a", "b", "", "a", "c")]
    rows[3] = LeadRow(full_name="dup", email="a@x.com")

    result = ImportOrchestrator(FakeDirectory(), FakeStore()).run_import("t1", "f.csv", rows)

    assert result.imported_count + result.skipped_count + result.error_count == len(rows)


def test_failed_batch_is_retried_row_by_row():
    rows = [LeadRow(full_name=f"Lead {index}") for index in range(150)]
    store = FakeStore(fail_batches={2}, fail_rows={"Lead 120"})

    result = ImportOrchestrator(FakeDirectory(), store, batch_size=100).run_import("t1", "f.csv", rows)

    assert result.imported_count == 149
    assert result.error_count == 1
    assert result.errors[0].row == 122
    assert result.errors[0].message == "row rejected: Lead 120"
    assert len(store.inserted) == 149


def test_distribution_assigns_only_unhinted_rows_and_persists_counter():
    settings = DistributionSettings(
        enabled=True, allocations=(Allocation("u1", "Owner One", 60), Allocation("u2", "Two", 40))
    )
    store = FakeStore(counter=59)
    rows = [
        LeadRow(full_name="No Hint 1"),
        LeadRow(full_name="Hinted", broker_email="owner@broker.com"),
        LeadRow(full_name="No Hint 2"),
        LeadRow(full_name="Bad Hint", broker_name="Stranger"),
    ]

    ImportOrchestrator(FakeDirectory(users=[OWNER], settings=settings), store).run_import("t1", "f.csv", rows)

    assigned = {lead["full_name"]: lead["assigned_to"] for lead in store.inserted}
    assert assigned == {"No Hint 1": "u1", "Hinted": "u1", "No Hint 2": "u2", "Bad Hint": None}
    assert store.saved_counters == [61]


def test_counter_not_saved_when_distribution_unused():
    settings = DistributionSettings(enabled=True, allocations=(Allocation("u1", "Owner One", 100),))
    store = FakeStore(counter=10)

    ImportOrchestrator(FakeDirectory(users=[OWNER], settings=settings), store).run_import(
        "t1", "f.csv", [LeadRow(full_name="Hinted", broker_email="owner@broker.com")]
    )

    assert store.saved_counters == []


def test_counter_save_failure_does_not_fail_import(caplog):
    settings = DistributionSettings(enabled=True, allocations=(Allocation("u1", "Owner One", 100),))
    store = FakeStore(fail_counter=True)

    with caplog.at_level(logging.ERROR, logger="leadhub.importing.orchestrator"):
        result = ImportOrchestrator(FakeDirectory(settings=settings), store).run_import(
            "t1", "f.csv", [LeadRow(full_name="Jane")]
        )

    assert result.imported_count == 1
    assert any(record.event == "distribution.counter_save_failed" for record in caplog.records)


def test_response_errors_are_capped_but_stored_in_full():
    store = FakeStore()
    rows = [LeadRow(full_name=None) for _ in range(5)]

    result = ImportOrchestrator(FakeDirectory(), store, max_response_errors=2).run_import("t1", "f.csv", rows)

    assert result.error_count == 5
    assert [error.row for error in result.errors] == [2, 3]
    assert len(store.records[0].errors) == 5


def test_unknown_tenant_aborts_before_touching_rows():
    store = FakeStore()

    with pytest.raises(NotFoundError):
        ImportOrchestrator(FakeDirectory(), store).run_import("missing", "f.csv", [LeadRow(full_name="Jane")])

    assert store.inserted == []
    assert store.records == []


def test_empty_import_is_recorded():
    store = FakeStore()

    result = ImportOrchestrator(FakeDirectory(), store).run_import("t1", "empty.csv", [])

    assert result.imported_count == 0
    assert store.records[0].total_rows == 0


def test_build_lead_values_normalizes_fields():
    row = LeadRow(
        full_name="  Jane Doe ",
        email=" jane@x.com ",
        notes="   ",
        call_count="4 times",
        created_at="2024-03-15",
        status="Ineligable",
    )

    values = build_lead_values("t1", row, "u1")

    assert values["full_name"] == "Jane Doe"
    assert values["email"] == "jane@x.com"
    assert values["notes"] is None
    assert values["call_count"] == 4
    assert values["source"] == "csv_import"
    assert (values["status"], values["sub_status"]) == ("bad_lead", "ineligible")
    assert values["created_at"].isoformat() == "2024-03-15T00:00:00+00:00"
    assert values["assigned_to"] == "u1"


def test_unparseable_created_at_falls_back_to_default():
    values = build_lead_values("t1", LeadRow(full_name="Jane", created_at="someday"), None)

    assert "created_at" not in values
