import logging
from datetime import timedelta
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from contextlib import asynccontextmanager
from chatbot.core.config import Settings, settings as default_settings
from chatbot.core.scheduler import create_scheduler, start_scheduler, stop_scheduler
from chatbot.services.identity_store import IdentityStore
from chatbot.services.project_store import ProjectStore
from chatbot.services.reply_composer import ReplyComposer
from chatbot.services.session_store import SessionStore
from chatbot.services.seed import seed_demo_data
from chatbot.api.routes import auth, chat, projects

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI app with its own set of in-memory stores.

    Every call returns an independent app, so tests never share state.
    """
    settings = settings or default_settings
    logging.basicConfig(level=settings.LOG_LEVEL, format="[%(asctime)s] %(levelname)s %(name)s - %(message)s")

    ttl = timedelta(minutes=settings.SESSION_TTL_MINUTES) if settings.SESSION_TTL_MINUTES else None
    identity = IdentityStore()
    sessions = SessionStore(ttl=ttl)
    projects_store = ProjectStore()
    scheduler = create_scheduler()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage app lifecycle events.

        Startup: start the session cleanup scheduler when sessions can expire
        Shutdown: stop it
        """
        if sessions.ttl is not None:
            start_scheduler(scheduler, sessions, settings.SESSION_CLEANUP_INTERVAL_MINUTES)
        yield
        stop_scheduler(scheduler)

    app = FastAPI(
        title="Chatbot Platform API",
        description="Demo multi-user chatbot backend with in-memory storage",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.identity = identity
    app.state.sessions = sessions
    app.state.scheduler = scheduler
    app.state.projects = projects_store
    app.state.composer = ReplyComposer(projects_store)

    if settings.SEED_DEMO_DATA:
        seed_demo_data(settings, identity, projects_store)

    # CORS middleware - allows frontend to make requests to backend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Malformed bodies and bad parameters are plain bad requests here
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "invalid request", "errors": jsonable_errors(exc)},
        )

    app.include_router(auth.router)
    app.include_router(projects.router)
    app.include_router(chat.router)

    @app.get("/", response_class=HTMLResponse)
    async def root():
        """Root endpoint - short usage guide"""
        return home_page(settings)

    @app.get("/health")
    async def health():
        """Health check endpoint - used by monitoring/deployment tools"""
        return {"status": "healthy"}

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()]


def home_page(settings: Settings) -> str:
    seed_line = ""
    if settings.SEED_DEMO_DATA:
        seed_line = f"<p>Seeded user: <b>{settings.DEMO_EMAIL}</b> / password <b>{settings.DEMO_PASSWORD}</b></p>"
    return f"""
        <h2>Simple Chatbot Platform (demo)</h2>
        {seed_line}
        <ul>
          <li>Register: POST /auth/register {{"email","password","name"}}</li>
          <li>Login: POST /auth/login {{"email","password"}} &rarr; returns token</li>
          <li>List Projects: GET /projects (Authorization: Bearer &lt;token&gt;)</li>
          <li>Create Project: POST /projects {{"name"}} (Authorization header)</li>
          <li>Add Prompt: POST /projects/{{projectId}}/prompts {{"prompt"}}</li>
          <li>Chat (GET): GET /chat?msg=hello&amp;project={{id}} (Authorization header)</li>
          <li>Chat (POST): POST /chat?project={{id}} with text/plain body</li>
        </ul>
        """


app = create_app()
