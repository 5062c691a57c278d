"""
Tests unitarios para DependencySnapshotUseCases.

Verifican el protocolo de dos pasos (upsert + borrado por complemento),
la deduplicación de dependientes y las guardas previas a tocar el store.
"""
import pytest

from sync_middleware.application.use_cases.snapshot_sync_use_cases import (
    DependencySnapshotUseCases,
    build_snapshots,
    collect_parent_ids,
)
from sync_middleware.domain.entities import KeyFilter
from sync_middleware.shared.exceptions.domain import EmptyPayloadException, MissingIdentityException
from sync_middleware.shared.exceptions.persistence import StoreWriteException

COLLECTION = "MemberDependencies"


def _record(parent_id, *dependents, **parent_fields):
    parent = {"parentMemberId": parent_id, **parent_fields}
    return {"parentMember": parent, "dependentMembers": list(dependents)}


class TestReconcile:
    """Tests para reconcile."""

    @pytest.fixture
    def use_cases(self, store, fixed_clock):
        return DependencySnapshotUseCases(store, collection=COLLECTION, clock=fixed_clock)

    @pytest.mark.asyncio
    async def test_example_snapshot_dedups_and_deletes_missing_parent(self, make_store, fixed_clock, fixed_now):
        store = make_store({COLLECTION: [{"parentMemberId": "P2", "dependentMembers": []}]})
        use_cases = DependencySnapshotUseCases(store, collection=COLLECTION, clock=fixed_clock)
        payload = [
            _record(
                "P1",
                {"memberDependencyId": "D1", "v": 1},
                {"memberDependencyId": "D1", "v": 2},
            )
        ]

        result = await use_cases.reconcile(payload)

        assert result.message == "Member dependency snapshot sync completed"
        assert result.upserted == 1
        assert result.deleted == 1
        assert store.keys(COLLECTION, "parentMemberId") == {"P1"}
        stored = store.find_one(COLLECTION, "parentMemberId", "P1")
        assert stored == {
            "parentMemberId": "P1",
            "parentMember": {"parentMemberId": "P1"},
            "dependentMembers": [{"memberDependencyId": "D1", "v": 2}],
            "lastSyncedAt": fixed_now,
        }

    @pytest.mark.asyncio
    async def test_store_key_set_equals_batch_key_set(self, make_store, fixed_clock):
        store = make_store({
            COLLECTION: [
                {"parentMemberId": "P1"},
                {"parentMemberId": "P2"},
                {"parentMemberId": "P3"},
                {"other": "sin clave"},
            ]
        })
        use_cases = DependencySnapshotUseCases(store, collection=COLLECTION, clock=fixed_clock)

        result = await use_cases.reconcile([_record("P2"), _record("P4"), _record("P2")])

        assert store.keys(COLLECTION, "parentMemberId") == {"P2", "P4"}
        assert result.upserted == 3
        assert result.deleted == 3

    @pytest.mark.asyncio
    async def test_upsert_runs_before_delete_as_single_batch(self, use_cases, store):
        await use_cases.reconcile([_record("P1"), _record("P2")])

        assert store.call_names() == ["batch_write", "delete_many"]
        _, collection, operations = store.calls[0]
        assert collection == COLLECTION
        assert [op.key for op in operations] == ["P1", "P2"]
        assert store.calls[1][2] == KeyFilter(field="parentMemberId", keys=("P1", "P2"), exclude=True)

    @pytest.mark.asyncio
    async def test_records_without_parent_id_are_dropped_from_upsert_only(self, use_cases, store):
        payload = [_record("P1"), {"parentMember": {"name": "sin id"}}, {"dependentMembers": []}]

        result = await use_cases.reconcile(payload)

        assert result.upserted == 1
        assert store.keys(COLLECTION, "parentMemberId") == {"P1"}

    @pytest.mark.asyncio
    async def test_missing_dependents_are_stored_as_empty_list(self, use_cases, store):
        await use_cases.reconcile([{"parentMember": {"parentMemberId": "P1"}, "dependentMembers": "no-list"}])

        assert store.find_one(COLLECTION, "parentMemberId", "P1")["dependentMembers"] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [[], None, {"parentMember": {"parentMemberId": "P1"}}])
    async def test_empty_or_non_list_payload_is_rejected(self, use_cases, store, payload):
        with pytest.raises(EmptyPayloadException) as exc_info:
            await use_cases.reconcile(payload)

        assert exc_info.value.message == "Payload must be a non-empty array"
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_batch_without_parent_ids_never_deletes(self, make_store, fixed_clock):
        existing = [{"parentMemberId": "P1"}, {"parentMemberId": "P2"}]
        store = make_store({COLLECTION: list(existing)})
        use_cases = DependencySnapshotUseCases(store, collection=COLLECTION, clock=fixed_clock)

        with pytest.raises(MissingIdentityException) as exc_info:
            await use_cases.reconcile([{"parentMember": {}}, {"dependentMembers": []}, "x"])

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "No valid parentMemberId found in payload"
        assert store.calls == []
        assert store.collections[COLLECTION] == existing

    @pytest.mark.asyncio
    async def test_whitespace_parent_id_is_a_valid_key(self, make_store, fixed_clock):
        store = make_store({COLLECTION: [{"parentMemberId": "P1"}]})
        use_cases = DependencySnapshotUseCases(store, collection=COLLECTION, clock=fixed_clock)

        result = await use_cases.reconcile([_record(" ")])

        assert result.upserted == 1
        assert result.deleted == 1
        assert store.keys(COLLECTION, "parentMemberId") == {" "}

    @pytest.mark.asyncio
    async def test_failed_upsert_skips_delete_phase(self, make_store, fixed_clock):
        store = make_store({COLLECTION: [{"parentMemberId": "P9"}]}, fail_on=["batch_write"])
        use_cases = DependencySnapshotUseCases(store, collection=COLLECTION, clock=fixed_clock)

        with pytest.raises(StoreWriteException):
            await use_cases.reconcile([_record("P1")])

        assert store.call_names() == ["batch_write"]
        assert store.keys(COLLECTION, "parentMemberId") == {"P9"}

    @pytest.mark.asyncio
    async def test_failed_delete_propagates_after_upsert(self, make_store, fixed_clock):
        store = make_store(fail_on=["delete_many"])
        use_cases = DependencySnapshotUseCases(store, collection=COLLECTION, clock=fixed_clock)

        with pytest.raises(StoreWriteException):
            await use_cases.reconcile([_record("P1")])

        assert store.keys(COLLECTION, "parentMemberId") == {"P1"}


def test_collect_parent_ids_is_unique_and_ordered() -> None:
    payload = [_record("P2"), _record("P1"), _record("P2"), {"parentMember": {"parentMemberId": ""}}]

    assert collect_parent_ids(payload) == ("P2", "P1")


def test_build_snapshots_keeps_parent_payload_verbatim(fixed_now) -> None:
    parent = {"parentMemberId": "P1", "nested": {"a": [1, 2]}}

    snapshots = build_snapshots([{"parentMember": parent, "dependentMembers": []}], fixed_now)

    assert snapshots[0].parent is parent
    assert snapshots[0].last_synced_at == fixed_now
