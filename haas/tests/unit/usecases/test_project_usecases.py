from __future__ import annotations

import pytest

from haas.adapters.api_errors import ApiClientError, ApiTimeoutError
from haas.domain.errors import (
    AccessDeniedError,
    InvalidInputError,
    InvalidQuantityError,
    NetworkFailure,
    NotFoundError,
    RemoteError,
    UnauthenticatedError,
)
from haas.tests.unit.app.helpers import seeded_mock
from haas.usecases.create_project import CreateProject, generate_project_id
from haas.usecases.hardware_action import PerformHardwareAction, coerce_quantity
from haas.usecases.join_project import JoinProject
from haas.usecases.list_projects import ListMyProjects, ListPublicProjects
from haas.usecases.load_project import LoadProject
from haas.usecases.load_resources import LoadResources
from haas.usecases.members import InviteMember, ListMembers, RemoveMember
from haas.usecases.set_visibility import SetVisibility


class _FailingPort:
    """Every port method raises the configured exception."""

    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    def __getattr__(self, name):
        def _raise(*args, **kwargs):
            raise self.exc

        return _raise


def test_generate_project_id_uses_epoch_ms() -> None:
    assert generate_project_id(lambda: 1712345678901) == "proj-1712345678901"


def test_create_project_defaults_private_with_quotas() -> None:
    mock = seeded_mock()
    created = CreateProject(mock, clock=lambda: 5)(user_id="bob", name=" Rover ")

    assert created.project.project_id == "proj-5"
    assert created.project.name == "Rover"
    assert created.project.is_public is False
    assert {r.hwset_id: r.total for r in created.resources} == {"hwset1": 15, "hwset2": 10}


def test_create_project_failure_without_message_reports_status() -> None:
    port = _FailingPort(ApiClientError("ctx", status=422))

    with pytest.raises(RemoteError) as err:
        CreateProject(port)(user_id="bob", name="Rover")

    assert err.value.message == "Failed to create project (status 422)"


def test_create_project_requires_session() -> None:
    with pytest.raises(UnauthenticatedError):
        CreateProject(seeded_mock())(user_id=None, name="Rover")


def test_list_projects() -> None:
    mock = seeded_mock()
    assert [p.project_id for p in ListMyProjects(mock)("alice")] == ["proj-1"]
    assert [p.project_id for p in ListPublicProjects(mock)()] == ["pub-1"]


def test_load_project_classifies() -> None:
    mock = seeded_mock()
    with pytest.raises(NotFoundError):
        LoadProject(mock)("missing", "alice")
    with pytest.raises(AccessDeniedError):
        LoadProject(mock)("proj-1", "bob")
    with pytest.raises(InvalidInputError):
        LoadProject(mock)(" ", "alice")


def test_join_project_access_denied_without_detail_gets_generic_text() -> None:
    port = _FailingPort(ApiClientError("ctx", status=403))

    with pytest.raises(AccessDeniedError) as err:
        JoinProject(port)("proj-1", "bob")

    assert err.value.message == "Access denied - cannot join this project"


def test_load_resources_other_failures_are_remote() -> None:
    port = _FailingPort(ApiClientError("ctx", status=404, detail="Project not found"))

    with pytest.raises(RemoteError):
        LoadResources(port)("proj-1", "alice")


@pytest.mark.parametrize("raw, expected", [(3, 3), ("7", 7), (" 2 ", 2), (2.9, 2), ("x", None), (True, None), (None, None)])
def test_coerce_quantity(raw, expected) -> None:
    assert coerce_quantity(raw) == expected


def test_hardware_action_validates_before_calling() -> None:
    mock = seeded_mock()
    action = PerformHardwareAction(mock)

    with pytest.raises(InvalidQuantityError):
        action(project_id="proj-1", hwset_id="hwset1", action="checkout", quantity=0, user_id="alice")
    with pytest.raises(InvalidInputError):
        action(project_id="proj-1", hwset_id="hwset1", action="borrow", quantity=1, user_id="alice")
    assert mock.calls == []


def test_hardware_action_network_failure_names_action() -> None:
    action = PerformHardwareAction(_FailingPort(ApiTimeoutError("t")))

    with pytest.raises(NetworkFailure) as err:
        action(project_id="p", hwset_id="hwset1", action="checkin", quantity=1, user_id="alice")

    assert err.value.message == "Network error during checkin"


def test_members_flow() -> None:
    mock = seeded_mock()

    assert InviteMember(mock)("proj-1", "alice", "bob") == "Invited bob to project"
    assert ListMembers(mock)("proj-1", "alice") == ["alice", "bob"]
    RemoveMember(mock)("proj-1", "alice", "bob")
    assert ListMembers(mock)("proj-1", "alice") == ["alice"]


def test_invite_requires_target() -> None:
    with pytest.raises(InvalidInputError) as err:
        InviteMember(seeded_mock())("proj-1", "alice", "  ")
    assert err.value.message == "Please enter a user ID to invite"


def test_set_visibility_non_owner_is_access_denied() -> None:
    mock = seeded_mock()

    assert SetVisibility(mock)("proj-1", "alice", True) is True
    with pytest.raises(AccessDeniedError):
        SetVisibility(mock)("proj-1", "bob", False)
