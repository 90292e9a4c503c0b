from fastapi import FastAPI
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
import logging

from hydro_habitat.core.config import settings
from hydro_habitat.core.logging_config import setup_logging
from hydro_habitat.db.database import init_db
from hydro_habitat.api.endpoints import health, tanks

logger = logging.getLogger(__name__)

# Create the tables when the service starts
@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database ready")
    yield
    logger.info("Hydro Habitat API shutting down")

app = FastAPI(
    title="Hydro Habitat API",
    description="Inventory of aquarium tanks: rooms, racks, volumes and water types.",
    version="1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["Health"])
app.include_router(tanks.router, prefix="/api/v1", tags=["Tanks"])


if __name__ == "__main__":
    import uvicorn

    setup_logging("api", level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
    logger.info(f"Server starting on port {settings.API_PORT}")
    uvicorn.run(app, host="0.0.0.0", port=settings.API_PORT)
