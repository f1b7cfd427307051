"""Adapter and use-case wiring for the client runtime.

This module owns lazy construction of the REST adapters and use-case objects
that depend on values in :class:`haas.viewmodels.settings_vm.SettingsVM`, and
builds the per-screen controllers on top of them.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..adapters.auth_rest import AuthRestAdapter
from ..adapters.projects_rest import ProjectsRestAdapter
from ..domain.entities import ProjectSeed
from ..domain.ports import AuthPort, ProjectPort, SessionPort
from ..usecases.auth import LoginUser, SignupUser
from ..usecases.create_project import CreateProject
from ..usecases.hardware_action import PerformHardwareAction
from ..usecases.join_project import JoinProject
from ..usecases.list_projects import ListMyProjects, ListPublicProjects
from ..usecases.load_project import LoadProject
from ..usecases.load_resources import LoadResources
from ..usecases.members import InviteMember, ListMembers, RemoveMember
from ..usecases.set_visibility import SetVisibility
from ..viewmodels.auth_vm import AuthVM
from ..viewmodels.dashboard_vm import DashboardVM
from ..viewmodels.settings_vm import SettingsVM
from .auth_controller import AuthController
from .dashboard_controller import DashboardController
from .fetch_pipeline import FetchPipeline, Offload
from .join_orchestrator import JoinLookupOrchestrator, NavigateFn
from .membership_manager import ConfirmFn
from .project_controller import ProjectDetailController, ProjectUseCases
from .session_store import SessionStore
from .timer_scheduler import TimerScheduler


class AppController:
    """Create and cache runtime adapters/use-cases from settings state.

    Ports can be injected (tests pass :class:`ProjectsMock`); otherwise the
    REST adapters are built from the current settings on first use.
    """

    def __init__(
        self,
        settings_vm: SettingsVM,
        *,
        storage: Optional[SessionPort] = None,
        project_port: Optional[ProjectPort] = None,
        auth_port: Optional[AuthPort] = None,
        offload: Optional[Offload] = None,
    ) -> None:
        self.settings_vm = settings_vm
        self.session = SessionStore(storage)
        self.offload = offload
        self._project_port = project_port
        self._auth_port = auth_port
        self._injected = project_port is not None
        self.uc_create: Optional[CreateProject] = None
        self.uc_list_mine: Optional[ListMyProjects] = None
        self.uc_list_public: Optional[ListPublicProjects] = None
        self.uc_load: Optional[LoadProject] = None
        self.uc_join: Optional[JoinProject] = None
        self.uc_resources: Optional[LoadResources] = None
        self.uc_action: Optional[PerformHardwareAction] = None
        self.uc_members: Optional[ListMembers] = None
        self.uc_invite: Optional[InviteMember] = None
        self.uc_remove: Optional[RemoveMember] = None
        self.uc_visibility: Optional[SetVisibility] = None
        self.uc_login: Optional[LoginUser] = None
        self.uc_signup: Optional[SignupUser] = None

    @property
    def project_port(self) -> Optional[ProjectPort]:
        return self._project_port

    def reset(self) -> None:
        """Drop cached REST adapters and use-cases so settings changes apply."""
        if not self._injected:
            self._project_port = None
            self._auth_port = None
        self.uc_create = None
        self.uc_login = None

    def ensure_ready(self) -> bool:
        """Ensure adapters/use-cases exist; ``False`` when settings are invalid."""
        if self.uc_create is not None and self.uc_login is not None:
            return True
        if self._project_port is None or self._auth_port is None:
            if not self.settings_vm.is_valid():
                return False
        if self._project_port is None:
            self._project_port = ProjectsRestAdapter(
                self.settings_vm.api_base_url,
                request_timeout_s=self.settings_vm.request_timeout_s,
                retries=self.settings_vm.retries,
            )
        if self._auth_port is None:
            self._auth_port = AuthRestAdapter(
                self.settings_vm.api_base_url,
                request_timeout_s=self.settings_vm.request_timeout_s,
            )

        port = self._project_port
        self.uc_create = CreateProject(port, quotas=self.settings_vm.default_quotas)
        self.uc_list_mine = ListMyProjects(port)
        self.uc_list_public = ListPublicProjects(port)
        self.uc_load = LoadProject(port)
        self.uc_join = JoinProject(port)
        self.uc_resources = LoadResources(port)
        self.uc_action = PerformHardwareAction(port)
        self.uc_members = ListMembers(port)
        self.uc_invite = InviteMember(port)
        self.uc_remove = RemoveMember(port)
        self.uc_visibility = SetVisibility(port)
        self.uc_login = LoginUser(self._auth_port)
        self.uc_signup = SignupUser(self._auth_port)
        return True

    def _require_ready(self) -> None:
        if not self.ensure_ready():
            raise RuntimeError("Client settings are invalid; check api_base_url")

    # ------------------------------------------------------------------
    # Screen factories
    # ------------------------------------------------------------------
    def build_auth(
        self, *, on_logged_in: Optional[Callable[[str], None]] = None
    ) -> AuthController:
        self._require_ready()
        return AuthController(
            vm=AuthVM(),
            session=self.session,
            uc_login=self.uc_login,
            uc_signup=self.uc_signup,
            pipeline=FetchPipeline(self.offload),
            on_logged_in=on_logged_in,
        )

    def build_dashboard(
        self,
        *,
        navigate: NavigateFn,
        on_logout: Optional[Callable[[], None]] = None,
    ) -> DashboardController:
        self._require_ready()
        pipeline = FetchPipeline(self.offload)
        orchestrator = JoinLookupOrchestrator(
            session=self.session,
            uc_join=self.uc_join,
            uc_load=self.uc_load,
            pipeline=pipeline,
            navigate=navigate,
        )
        return DashboardController(
            vm=DashboardVM(),
            session=self.session,
            uc_list_mine=self.uc_list_mine,
            uc_list_public=self.uc_list_public,
            uc_create=self.uc_create,
            uc_join=self.uc_join,
            orchestrator=orchestrator,
            pipeline=pipeline,
            navigate=navigate,
            on_logout=on_logout,
        )

    def build_project_view(
        self,
        project_id: str,
        *,
        scheduler: TimerScheduler,
        seed: Optional[ProjectSeed] = None,
        confirm: Optional[ConfirmFn] = None,
    ) -> ProjectDetailController:
        self._require_ready()
        usecases = ProjectUseCases(
            load_project=self.uc_load,
            load_resources=self.uc_resources,
            hardware_action=self.uc_action,
            list_members=self.uc_members,
            invite_member=self.uc_invite,
            remove_member=self.uc_remove,
            set_visibility=self.uc_visibility,
        )
        return ProjectDetailController(
            project_id=project_id,
            session=self.session,
            usecases=usecases,
            scheduler=scheduler,
            seed=seed,
            confirm=confirm,
            offload=self.offload,
            close_delay_ms=self.settings_vm.menu_close_delay_ms,
        )


__all__ = ["AppController"]
