import logging

from chatbot.core.config import Settings
from chatbot.services.identity_store import IdentityStore
from chatbot.services.project_store import ProjectStore

logger = logging.getLogger(__name__)


def seed_demo_data(settings: Settings, identity: IdentityStore, projects: ProjectStore) -> None:
    """
    Create the demo user and project (only if the demo user does not exist).

    Lets the API be tried straight away with the configured demo credentials.
    """
    if identity.get_by_email(settings.DEMO_EMAIL) is not None:
        return

    user_id = identity.register(settings.DEMO_EMAIL, settings.DEMO_PASSWORD, settings.DEMO_NAME)
    project = projects.create(user_id, settings.DEMO_PROJECT_NAME)
    for prompt in settings.DEMO_PROMPTS:
        projects.add_prompt(project.id, user_id, prompt)

    logger.info(f"Seeded demo user {settings.DEMO_EMAIL} with project {project.id}")
