from dataclasses import dataclass, field
from typing import List


@dataclass
class Project:
    """
    Project owned by a single user.

    Prompts are append-only and keep insertion order. Instances handed out
    by the project store are copies, so mutating one never touches the store.
    """
    id: int
    owner_id: int
    name: str
    prompts: List[str] = field(default_factory=list)

    def copy(self) -> "Project":
        return Project(id=self.id, owner_id=self.owner_id, name=self.name, prompts=list(self.prompts))
