from __future__ import annotations

import pytest

from haas.app.join_orchestrator import JoinLookupOrchestrator
from haas.domain.errors import NotFoundError
from haas.tests.unit.app.helpers import inline_pipeline, logged_in, seeded_mock
from haas.usecases.join_project import JoinProject
from haas.usecases.load_project import LoadProject


def _orchestrator(mock, user="bob", *, uc_load=None):
    navigations = []
    orchestrator = JoinLookupOrchestrator(
        session=logged_in(user),
        uc_join=JoinProject(mock),
        uc_load=uc_load or LoadProject(mock),
        pipeline=inline_pipeline(),
        navigate=lambda pid, seed: navigations.append((pid, seed)),
    )
    return orchestrator, navigations


def _methods(mock):
    return [c["method"] for c in mock.calls]


@pytest.mark.asyncio
async def test_public_project_joins_then_reads_then_navigates() -> None:
    mock = seeded_mock()
    orchestrator, navigations = _orchestrator(mock)

    outcome = await orchestrator.join(" pub-1 ")

    assert outcome.ok
    assert _methods(mock) == ["join_project", "get_project"]
    pid, seed = navigations[0]
    assert pid == "pub-1"
    assert seed.name == "Open Lab"
    assert seed.is_public is True
    assert seed.created_by == "carol"
    assert seed.complete


@pytest.mark.asyncio
async def test_private_project_stops_after_join() -> None:
    mock = seeded_mock()
    orchestrator, navigations = _orchestrator(mock)

    outcome = await orchestrator.join("proj-1")

    assert outcome.error.code == "ACCESS_DENIED"
    assert outcome.error.message == "Project is private"
    assert _methods(mock) == ["join_project"]
    assert navigations == []


@pytest.mark.asyncio
async def test_unknown_project_is_not_found() -> None:
    mock = seeded_mock()
    orchestrator, navigations = _orchestrator(mock)

    outcome = await orchestrator.join("nope")

    assert outcome.error.code == "NOT_FOUND"
    assert outcome.error.message == "Project not found"
    assert navigations == []


@pytest.mark.asyncio
async def test_existing_member_rejoins_private_project() -> None:
    mock = seeded_mock()
    orchestrator, navigations = _orchestrator(mock, user="alice")

    outcome = await orchestrator.join("proj-1")

    assert outcome.ok
    assert navigations[0][0] == "proj-1"


@pytest.mark.asyncio
async def test_blank_id_fails_before_any_call() -> None:
    mock = seeded_mock()
    orchestrator, navigations = _orchestrator(mock)

    outcome = await orchestrator.join("   ")

    assert outcome.error.code == "INVALID_INPUT"
    assert outcome.error.message == "Please enter a project ID"
    assert mock.calls == []


@pytest.mark.asyncio
async def test_without_session_is_unauthenticated() -> None:
    mock = seeded_mock()
    orchestrator, navigations = _orchestrator(mock, user=None)

    outcome = await orchestrator.join("pub-1")

    assert outcome.error.code == "UNAUTHENTICATED"
    assert mock.calls == []


@pytest.mark.asyncio
async def test_detail_failure_after_join_is_remote_error() -> None:
    mock = seeded_mock()

    def _vanished(project_id, user_id):
        raise NotFoundError("Project not found")

    orchestrator, navigations = _orchestrator(mock, uc_load=_vanished)

    outcome = await orchestrator.join("pub-1")

    assert outcome.error.code == "REMOTE_ERROR"
    assert outcome.error.message == "Project not found"
    assert navigations == []
