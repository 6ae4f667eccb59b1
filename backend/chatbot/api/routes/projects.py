from fastapi import APIRouter, Depends, HTTPException
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from chatbot.core.errors import ChatbotError
from chatbot.api.dependencies import get_current_user_id, get_project_store
from chatbot.services.project_store import PROJECT_NOT_FOUND_MESSAGE, ProjectStore

router = APIRouter(prefix="/projects", tags=["projects"])


class ProjectCreate(BaseModel):
    name: Optional[str] = None


class PromptCreate(BaseModel):
    prompt: Optional[str] = None


class ProjectResponse(BaseModel):
    id: int
    owner_id: int = Field(serialization_alias="ownerId")
    name: str
    prompts: List[str]

    model_config = ConfigDict(from_attributes=True)


class PromptsResponse(BaseModel):
    ok: bool
    prompts: List[str]


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    user_id: int = Depends(get_current_user_id),
    projects: ProjectStore = Depends(get_project_store)
):
    """List all projects for current user"""
    return projects.list_by_owner(user_id)


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    project: ProjectCreate,
    user_id: int = Depends(get_current_user_id),
    projects: ProjectStore = Depends(get_project_store)
):
    """Create a new project"""
    try:
        return projects.create(user_id, project.name)
    except ChatbotError as e:
        raise e.to_http()


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    user_id: int = Depends(get_current_user_id),
    projects: ProjectStore = Depends(get_project_store)
):
    """Get a specific project"""
    project = projects.get(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail=PROJECT_NOT_FOUND_MESSAGE)
    if project.owner_id != user_id:
        raise HTTPException(status_code=403, detail="not owner")
    return project


@router.post("/{project_id}/prompts", response_model=PromptsResponse)
async def add_prompt(
    project_id: int,
    body: PromptCreate,
    user_id: int = Depends(get_current_user_id),
    projects: ProjectStore = Depends(get_project_store)
):
    """Append a prompt to a project owned by the current user"""
    try:
        prompts = projects.add_prompt(project_id, user_id, body.prompt)
    except ChatbotError as e:
        raise e.to_http()
    return {"ok": True, "prompts": prompts}
