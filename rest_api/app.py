# rest_api/app.py
"""Reference HaaS service: users, projects, hardware sets and memberships.

In-memory only. Every rule the client gates cosmetically (ownership,
membership, availability) is enforced here again.
"""
import logging
import os
import threading
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger("haas.rest_api")

HWSET_NAMES: Dict[str, str] = {
    "hwset1": "Arduino Kit",
    "hwset2": "Raspberry Pi Kit",
}
HARDWARE_ACTIONS = ("checkout", "checkin")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=_camel, populate_by_name=True)


# ---------- Request models ----------
class Credentials(CamelModel):
    user_id: str = ""
    password: str = ""


class ProjectCreate(CamelModel):
    project_id: str = ""
    name: str = ""
    description: str = ""
    created_by: str = ""
    is_public: bool = False
    default_hwset1_total: int = Field(15, alias="default_hwset1_total", ge=0)
    default_hwset2_total: int = Field(10, alias="default_hwset2_total", ge=0)


class UserRef(CamelModel):
    user_id: str = ""


class VisibilityUpdate(CamelModel):
    user_id: str = ""
    is_public: bool


class HardwareRequest(CamelModel):
    quantity: int
    user_id: str = ""


class InviteRequest(CamelModel):
    requesting_user: str = ""
    invite_user: str = ""


class RemoveRequest(CamelModel):
    requesting_user: str = ""


# ---------- Response models ----------
class ProjectOut(CamelModel):
    project_id: str
    name: str
    description: str = ""
    created_by: str
    is_public: bool = False


class HardwareSetOut(CamelModel):
    hwset_id: str
    name: str
    total: int
    allocated_to_project: int
    available: int
    notes: Optional[str] = None


class HardwareSet(BaseModel):
    name: str
    total: int
    allocated: int = 0
    notes: Optional[str] = None

    def out(self, hwset_id: str) -> HardwareSetOut:
        return HardwareSetOut(
            hwset_id=hwset_id,
            name=self.name,
            total=self.total,
            allocated_to_project=self.allocated,
            available=self.total - self.allocated,
            notes=self.notes,
        )


class ProjectRecord(BaseModel):
    project: ProjectOut
    members: List[str] = Field(default_factory=list)
    hwsets: Dict[str, HardwareSet] = Field(default_factory=dict)


class ProjectStore:
    """Thread-safe in-memory state; one instance per app."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users: Dict[str, str] = {}
        self.projects: Dict[str, ProjectRecord] = {}

    def existing(self, project_id: str) -> ProjectRecord:
        record = self.projects.get(project_id)
        if record is None:
            raise HTTPException(404, "Project not found")
        return record

    def member_record(self, project_id: str, user_id: str) -> ProjectRecord:
        record = self.existing(project_id)
        if not user_id or user_id not in record.members:
            raise HTTPException(403, "Access denied - you are not a member of this project")
        return record

    def owned_record(self, project_id: str, user_id: str, message: str) -> ProjectRecord:
        record = self.existing(project_id)
        if not user_id or record.project.created_by != user_id:
            raise HTTPException(403, message)
        return record


def _cors_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def create_app(store: Optional[ProjectStore] = None) -> FastAPI:
    store = store or ProjectStore()
    app = FastAPI(title="HaaS API", version="0.1.0")
    app.state.store = store

    origins = _cors_list(os.getenv("CORS_ALLOW_ORIGINS", ""))
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=_cors_list(os.getenv("CORS_ALLOW_METHODS", "GET,POST,PATCH,DELETE,OPTIONS")),
            allow_headers=_cors_list(os.getenv("CORS_ALLOW_HEADERS", "Content-Type")),
        )

    # ---------- Error bodies ----------
    @app.exception_handler(StarletteHTTPException)
    async def http_error(_request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_error(_request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field_name = ".".join(str(part) for part in first.get("loc", ())[1:]) or "body"
        message = f"Invalid {field_name}: {first.get('msg', 'bad value')}"
        return JSONResponse(status_code=400, content={"error": message})

    # ---------- Auth ----------
    @app.post("/api/signup", status_code=201)
    def signup(body: Credentials):
        user_id = body.user_id.strip()
        if not user_id or not body.password:
            raise HTTPException(400, "userId and password are required")
        with store.lock:
            if user_id in store.users:
                raise HTTPException(409, "User already exists")
            store.users[user_id] = body.password
        log.info("Signed up %s", user_id)
        return {"message": "User created", "userId": user_id}

    @app.post("/api/login")
    def login(body: Credentials):
        user_id = body.user_id.strip()
        with store.lock:
            if not user_id or store.users.get(user_id) != body.password:
                raise HTTPException(401, "Invalid credentials")
        return {"message": "Login successful", "userId": user_id}

    # ---------- Projects ----------
    @app.get("/api/projects", response_model=List[ProjectOut])
    def list_projects(userId: str = ""):
        with store.lock:
            return [r.project for r in store.projects.values() if userId and userId in r.members]

    @app.get("/api/projects/public", response_model=List[ProjectOut])
    def list_public_projects():
        with store.lock:
            return [r.project for r in store.projects.values() if r.project.is_public]

    @app.post("/api/projects", status_code=201)
    def create_project(body: ProjectCreate):
        project_id = body.project_id.strip()
        name = body.name.strip()
        if not project_id or not name:
            raise HTTPException(400, "projectId and name are required")
        if not body.created_by:
            raise HTTPException(400, "createdBy is required")
        with store.lock:
            if project_id in store.projects:
                raise HTTPException(409, "Project ID already exists")
            record = ProjectRecord(
                project=ProjectOut(
                    project_id=project_id,
                    name=name,
                    description=body.description.strip(),
                    created_by=body.created_by,
                    is_public=body.is_public,
                ),
                members=[body.created_by],
                hwsets={
                    "hwset1": HardwareSet(name=HWSET_NAMES["hwset1"], total=body.default_hwset1_total),
                    "hwset2": HardwareSet(name=HWSET_NAMES["hwset2"], total=body.default_hwset2_total),
                },
            )
            store.projects[project_id] = record
            resources = [hw.out(key).model_dump(by_alias=True) for key, hw in record.hwsets.items()]
        log.info("Created project %s for %s", project_id, body.created_by)
        return {"project": record.project.model_dump(by_alias=True), "resources": resources}

    @app.get("/api/projects/{project_id}", response_model=ProjectOut)
    def get_project(project_id: str, userId: str = ""):
        with store.lock:
            return store.member_record(project_id, userId).project

    @app.post("/api/projects/{project_id}/join")
    def join_project(project_id: str, body: UserRef):
        if not body.user_id:
            raise HTTPException(400, "userId is required")
        with store.lock:
            record = store.existing(project_id)
            if body.user_id in record.members:
                return {"message": "Already a member", "projectId": project_id}
            if not record.project.is_public:
                raise HTTPException(403, "Project is private")
            record.members.append(body.user_id)
        return {"message": f"Joined project {project_id}", "projectId": project_id}

    @app.patch("/api/projects/{project_id}/visibility")
    def set_visibility(project_id: str, body: VisibilityUpdate):
        with store.lock:
            record = store.owned_record(
                project_id, body.user_id, "Only the project owner can change visibility"
            )
            record.project.is_public = body.is_public
            return {"projectId": project_id, "isPublic": record.project.is_public}

    # ---------- Resources ----------
    @app.get(
        "/api/projects/{project_id}/resources",
        response_model=List[HardwareSetOut],
    )
    def list_resources(project_id: str, userId: str = ""):
        with store.lock:
            record = store.member_record(project_id, userId)
            return [hw.out(key) for key, hw in record.hwsets.items()]

    @app.post("/api/projects/{project_id}/resources/{hwset_id}/{action}")
    def hardware_action(
        project_id: str,
        hwset_id: str,
        action: str,
        body: HardwareRequest,
    ):
        if action not in HARDWARE_ACTIONS:
            raise HTTPException(404, f"Unknown action {action}")
        with store.lock:
            record = store.member_record(project_id, body.user_id)
            hwset = record.hwsets.get(hwset_id)
            if hwset is None:
                raise HTTPException(404, "Hardware set not found")
            if body.quantity <= 0:
                raise HTTPException(400, "Quantity must be greater than 0")
            if action == "checkout":
                available = hwset.total - hwset.allocated
                if body.quantity > available:
                    raise HTTPException(400, f"Only {available} units available")
                hwset.allocated += body.quantity
                message = f"Checked out {body.quantity} units of {hwset.name}"
            else:
                if body.quantity > hwset.allocated:
                    raise HTTPException(400, f"Only {hwset.allocated} units checked out")
                hwset.allocated -= body.quantity
                message = f"Checked in {body.quantity} units of {hwset.name}"
            resource = hwset.out(hwset_id).model_dump(by_alias=True)
        log.info("%s %s: %s", project_id, hwset_id, message)
        return {"message": message, "resource": resource}

    # ---------- Members ----------
    @app.get("/api/projects/{project_id}/members")
    def list_members(project_id: str, userId: str = ""):
        with store.lock:
            record = store.member_record(project_id, userId)
            return {"members": list(record.members)}

    @app.post("/api/projects/{project_id}/invite")
    def invite_member(project_id: str, body: InviteRequest):
        invitee = body.invite_user.strip()
        with store.lock:
            record = store.owned_record(
                project_id, body.requesting_user, "Only the project owner can invite users"
            )
            if invitee not in store.users:
                raise HTTPException(404, "User not found")
            if invitee in record.members:
                raise HTTPException(400, "User is already a member")
            record.members.append(invitee)
        return {"message": f"Invited {invitee} to project"}

    @app.delete("/api/projects/{project_id}/members/{member_id}")
    def remove_member(project_id: str, member_id: str, body: RemoveRequest):
        with store.lock:
            record = store.owned_record(
                project_id, body.requesting_user, "Only the project owner can remove members"
            )
            if member_id == record.project.created_by:
                raise HTTPException(400, "Cannot remove the project owner")
            if member_id not in record.members:
                raise HTTPException(404, "User is not a member")
            record.members.remove(member_id)
        log.info("Removed %s from %s", member_id, project_id)
        return {"message": f"Removed {member_id} from project"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.getenv("HAAS_HOST", "127.0.0.1"), port=int(os.getenv("HAAS_PORT", "5000")))
