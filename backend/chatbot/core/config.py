from pydantic_settings import BaseSettings
from typing import Optional, Union


class Settings(BaseSettings):
    # CORS origins - allows a frontend to make requests to the backend
    # Can be string (comma-separated) or list for flexibility
    CORS_ORIGINS: Union[str, list[str]
                        ] = "http://localhost:5173,http://localhost:3000"

    # Demo data created at startup so the API can be tried without registering
    SEED_DEMO_DATA: bool = True
    DEMO_EMAIL: str = "demo@example.com"
    DEMO_PASSWORD: str = "demo123"
    DEMO_NAME: str = "Demo User"
    DEMO_PROJECT_NAME: str = "Demo Project"
    DEMO_PROMPTS: list[str] = [
        "You are a helpful assistant.",
        "When asked, provide concise examples.",
    ]

    # Session lifetime - None keeps sessions until logout
    SESSION_TTL_MINUTES: Optional[int] = None
    # How often the background job purges expired sessions (only runs with a TTL)
    SESSION_CLEANUP_INTERVAL_MINUTES: int = 10

    LOG_LEVEL: str = "INFO"

    def get_cors_origins(self) -> list[str]:
        """Parse CORS_ORIGINS string into list"""
        if isinstance(self.CORS_ORIGINS, str):
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
        return self.CORS_ORIGINS if isinstance(self.CORS_ORIGINS, list) else []

    class Config:
        # Load settings from .env file if it exists
        # Environment variables override defaults
        env_file = ".env"
        case_sensitive = True  # Environment variable names are case-sensitive


settings = Settings()
