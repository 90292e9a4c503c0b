from typing import List, Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./hydro_habitat.db"
    API_PORT: int = 8080

    # client side
    API_BASE_URL: str = "http://localhost:8080"
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173", # Vite dev server
        "http://localhost:3000",
        "http://localhost",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    class Config:
        env_file = ".env"

settings = Settings()
