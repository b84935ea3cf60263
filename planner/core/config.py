from pydantic_settings import BaseSettings
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str = "sqlite:///./data/tasks.db"
    SQL_ECHO: bool = False

    # Project settings
    PROJECT_NAME: str = "Planner API"
    API_V1_STR: str = "/api/v1"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    LOG_LEVEL: str = "INFO"

    # The always-present fallback list (id 1)
    DEFAULT_LIST_NAME: str = "Inbox"
    DEFAULT_LIST_COLOR: str = "#3b82f6"
    DEFAULT_LIST_EMOJI: str = "📥"

    class Config:
        env_file = ".env"
        # Variables in .env that aren't defined here are simply ignored.
        extra = "ignore"

settings = Settings()
