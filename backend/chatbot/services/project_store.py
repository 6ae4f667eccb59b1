import itertools
import logging
import threading
from typing import Dict, List, Optional

from chatbot.core.errors import Forbidden, InvalidInput, NotFound
from chatbot.models.project import Project

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND_MESSAGE = "project not found"


class ProjectStore:
    """Service for managing projects and their prompts"""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._projects: Dict[int, Project] = {}
        self._ids = itertools.count(1)

    def create(self, owner_id: int, name: Optional[str]) -> Project:
        """Create an empty project owned by owner_id"""
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidInput("project name required")

        with self._lock:
            project_id = next(self._ids)
            project = Project(id=project_id, owner_id=owner_id, name=cleaned)
            self._projects[project_id] = project
            snapshot = project.copy()

        logger.info(f"User {owner_id} created project {project_id}")
        return snapshot

    def list_by_owner(self, owner_id: int) -> List[Project]:
        """List all projects owned by a user, in creation order"""
        with self._lock:
            return [p.copy() for p in self._projects.values() if p.owner_id == owner_id]

    def get(self, project_id: int) -> Optional[Project]:
        with self._lock:
            project = self._projects.get(project_id)
            return project.copy() if project else None

    def add_prompt(self, project_id: int, requester_id: int, prompt: Optional[str]) -> List[str]:
        """
        Append a prompt to a project owned by requester_id.

        Checks run in order: the project must exist, the requester must own
        it, and the prompt must be non-blank. A failed check leaves the
        prompt list untouched. Returns the full prompt list after the append.
        """
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                raise NotFound(PROJECT_NOT_FOUND_MESSAGE)
            if project.owner_id != requester_id:
                logger.warning(f"User {requester_id} tried to add a prompt to project {project_id}")
                raise Forbidden("not owner")
            cleaned = (prompt or "").strip()
            if not cleaned:
                raise InvalidInput("prompt required")
            project.prompts.append(cleaned)
            return list(project.prompts)
