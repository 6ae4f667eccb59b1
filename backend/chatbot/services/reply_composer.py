from typing import List, Optional

from chatbot.services.project_store import ProjectStore

# Number of most recent prompts blended into a reply
MAX_PROMPTS_IN_REPLY = 3
# Echoes shorter than this get a "short suggestion", longer ones a summary
SHORT_MESSAGE_LENGTH = 40
SUMMARY_LENGTH = 120
EMPTY_MESSAGE_PLACEHOLDER = "..."


class ReplyComposer:
    """
    Builds the simulated chat reply.

    There is no model behind this: the reply is a template filled with the
    project name, its most recent prompts and an echo of the message. The
    output depends only on the arguments and the project store contents,
    and composing never mutates the store.
    """

    def __init__(self, projects: ProjectStore):
        self.projects = projects

    def compose(self, user_id: int, project_id: Optional[int], message: Optional[str]) -> str:
        parts: List[str] = ["🤖 Simulated reply:\n"]
        parts.append(self._project_context(user_id, project_id))

        cleaned = (message or "").strip()
        parts.append(f"\nUser message: {cleaned}\n")

        echo = cleaned or EMPTY_MESSAGE_PLACEHOLDER
        parts.append(f"\nAnswer: I heard you say '{echo}'. ")
        if len(echo) < SHORT_MESSAGE_LENGTH:
            parts.append(f"Here's a short suggestion: {echo} ✅")
        else:
            parts.append(f"Summary: {echo[:SUMMARY_LENGTH]}...")
        return "".join(parts)

    def _project_context(self, user_id: int, project_id: Optional[int]) -> str:
        if project_id is None:
            return "(no project specified)\n"

        project = self.projects.get(project_id)
        # Lookup problems are reported inline; the reply still goes out
        if project is None:
            return f"Project not found (id={project_id}). "
        if project.owner_id != user_id:
            return "You are not the owner of the project. "

        lines = [f"Project: {project.name}\n"]
        if project.prompts:
            lines.append("Using prompts (most recent first):\n")
            recent = list(reversed(project.prompts))[:MAX_PROMPTS_IN_REPLY]
            lines.extend(f"- {prompt}\n" for prompt in recent)
        else:
            lines.append("(no prompts stored)\n")
        return "".join(lines)
