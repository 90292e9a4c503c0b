from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()

class HealthResponse(BaseModel):
    status: str

@router.get("/health", response_model=HealthResponse)
def health_check():
    """Liveness probe: answers as long as the process is serving requests."""
    return {"status": "ok"}
