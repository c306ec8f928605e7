"""Tests for mutation sequencing, refresh and failure surfacing."""

from __future__ import annotations

import asyncio

from ledger.mutation_coordinator import MutationCoordinator, MutationStatus
from ledger.query_controller import QueryController
from shared.errors import NotFoundError, ServerError, ValidationError
from tests.fakes import RecordingNotifier, ScriptedRepository, in_memory_repository, make_fields, make_transaction


def _build(seed=None):
    repository = ScriptedRepository(in_memory_repository(seed=seed))
    notifier = RecordingNotifier()
    query_controller = QueryController(repository, notifier)
    coordinator = MutationCoordinator(repository, query_controller, notifier)
    return repository, notifier, query_controller, coordinator


def test_create_success_refreshes_exactly_once() -> None:
    repository, notifier, query_controller, coordinator = _build()

    result = asyncio.run(coordinator.create(make_fields()))

    assert result.status == MutationStatus.SUCCEEDED
    assert result.transaction is not None
    assert repository.calls == ["create", "list"]
    assert notifier.successes == ["Transaction Added Successfully"]
    assert [item.id for item in query_controller.snapshot().transactions] == [result.transaction.id]


def test_update_success_refreshes_with_current_criteria() -> None:
    record = make_transaction("1", reference="before")
    repository, notifier, query_controller, coordinator = _build(seed=[record])
    asyncio.run(query_controller.set_criteria(query_controller.criteria.set_type("expense")))
    repository.calls.clear()

    result = asyncio.run(coordinator.update("1", make_fields(reference="after")))

    assert result.ok
    assert result.transaction is None
    assert repository.calls == ["update", "list"]
    (updated,) = query_controller.snapshot().transactions
    assert updated.reference == "after"
    assert query_controller.snapshot().criteria.type_filter.value == "expense"
    assert notifier.successes == ["Transaction Updated Successfully"]


def test_delete_success_removes_record_from_displayed_list() -> None:
    record = make_transaction("1")
    repository, notifier, query_controller, coordinator = _build(seed=[record, make_transaction("2")])
    asyncio.run(query_controller.refresh())

    result = asyncio.run(coordinator.delete(record))

    assert result.ok
    assert [item.id for item in query_controller.snapshot().transactions] == ["2"]
    assert notifier.successes == ["Transaction Deleted"]


def test_failed_mutation_keeps_list_and_skips_refresh() -> None:
    repository, notifier, query_controller, coordinator = _build(seed=[make_transaction("1")])
    asyncio.run(query_controller.refresh())
    before = query_controller.snapshot()
    repository.calls.clear()
    repository.failures["create"] = ServerError("down", status=500)

    result = asyncio.run(coordinator.create(make_fields()))

    assert result.status == MutationStatus.FAILED
    assert isinstance(result.error, ServerError)
    assert repository.calls == ["create"]
    assert notifier.errors == ["Failed to add transaction"]
    assert notifier.successes == []
    assert query_controller.snapshot() == before


def test_rejected_update_is_reported_without_refresh() -> None:
    repository, notifier, _, coordinator = _build(seed=[make_transaction("1")])
    repository.failures["update"] = ValidationError("bad category", status=400)

    result = asyncio.run(coordinator.update("1", make_fields()))

    assert result.status == MutationStatus.FAILED
    assert repository.calls == ["update"]
    assert notifier.errors == ["Failed to update transaction"]


def test_not_found_triggers_single_resync_refresh() -> None:
    record = make_transaction("1")
    repository, notifier, query_controller, coordinator = _build(seed=[record])
    asyncio.run(query_controller.refresh())
    asyncio.run(repository.inner.delete_transaction("1"))
    repository.calls.clear()

    result = asyncio.run(coordinator.delete(record))

    assert result.status == MutationStatus.FAILED
    assert isinstance(result.error, NotFoundError)
    assert repository.calls == ["delete", "list"]
    assert notifier.errors == ["Unable to delete"]
    assert query_controller.snapshot().transactions == ()


def test_duplicate_dispatch_for_same_key_is_skipped_while_pending() -> None:
    repository, notifier, _, coordinator = _build()

    async def _scenario():
        repository.gate = asyncio.Event()
        first = asyncio.create_task(coordinator.create(make_fields()))
        await asyncio.sleep(0)
        assert coordinator.is_pending("form:create")
        second = await coordinator.create(make_fields())
        repository.gate.set()
        return await first, second

    first, second = asyncio.run(_scenario())

    assert first.status == MutationStatus.SUCCEEDED
    assert second.status == MutationStatus.SKIPPED
    assert repository.count("create") == 1
    assert notifier.successes == ["Transaction Added Successfully"]
    assert not coordinator.is_pending("form:create")


def test_mutations_on_different_records_are_independent() -> None:
    first_record = make_transaction("1")
    second_record = make_transaction("2")
    repository, _, _, coordinator = _build(seed=[first_record, second_record])

    async def _scenario():
        repository.gate = asyncio.Event()
        tasks = [
            asyncio.create_task(coordinator.delete(first_record)),
            asyncio.create_task(coordinator.delete(second_record)),
        ]
        await asyncio.sleep(0)
        repository.gate.set()
        return await asyncio.gather(*tasks)

    results = asyncio.run(_scenario())

    assert [result.status for result in results] == [MutationStatus.SUCCEEDED, MutationStatus.SUCCEEDED]
    assert repository.count("delete") == 2
