from __future__ import annotations

import asyncio

import pytest

from haas.app.fetch_pipeline import FetchPipeline, run_inline
from haas.domain.errors import NotFoundError
from haas.tests.unit.app.helpers import ManualOffload, settle


@pytest.mark.asyncio
async def test_older_result_is_stale_when_slot_reissued() -> None:
    offload = ManualOffload()
    pipeline = FetchPipeline(offload)

    first = asyncio.create_task(pipeline.run("project", lambda: "old"))
    await settle()
    second = asyncio.create_task(pipeline.run("project", lambda: "new"))
    await settle()

    # complete the newer call first, then the older one
    offload.resolve(1)
    offload.resolve(0)
    old_result, new_result = await first, await second

    assert old_result.value == "old"
    assert old_result.stale
    assert new_result.value == "new"
    assert not new_result.stale


@pytest.mark.asyncio
async def test_slots_are_independent() -> None:
    offload = ManualOffload()
    pipeline = FetchPipeline(offload)

    resources = asyncio.create_task(pipeline.run("resources", lambda: [1]))
    members = asyncio.create_task(pipeline.run("members", lambda: ["alice"]))
    await settle()
    offload.resolve(0)
    offload.resolve(0)

    assert not (await resources).stale
    assert not (await members).stale


@pytest.mark.asyncio
async def test_teardown_marks_in_flight_results_stale() -> None:
    offload = ManualOffload()
    pipeline = FetchPipeline(offload)

    task = asyncio.create_task(pipeline.run("members", lambda: ["alice"]))
    await settle()
    pipeline.teardown()
    offload.resolve()
    result = await task

    assert result.stale
    assert pipeline.closed


@pytest.mark.asyncio
async def test_run_after_teardown_does_not_call() -> None:
    calls = []
    pipeline = FetchPipeline(run_inline)
    pipeline.teardown()

    result = await pipeline.run("project", lambda: calls.append("x"))

    assert result.stale
    assert calls == []


@pytest.mark.asyncio
async def test_use_case_errors_are_captured() -> None:
    def _fail():
        raise NotFoundError("Project not found")

    result = await FetchPipeline(run_inline).run("project", _fail)

    assert not result.ok
    assert result.error.code == "NOT_FOUND"
    assert result.value is None


@pytest.mark.asyncio
async def test_programming_errors_propagate() -> None:
    def _boom():
        raise KeyError("bug")

    with pytest.raises(KeyError):
        await FetchPipeline(run_inline).run("project", _boom)


@pytest.mark.asyncio
async def test_default_offload_runs_in_thread() -> None:
    result = await FetchPipeline().run("lookup", lambda a, b=0: a + b, 2, b=3)
    assert result.value == 5


def test_invalidate_supersedes_without_issuing() -> None:
    pipeline = FetchPipeline(run_inline)
    token = pipeline.issue("resources")

    pipeline.invalidate("resources")

    assert token.cancelled
    assert not pipeline.issue("resources").cancelled
