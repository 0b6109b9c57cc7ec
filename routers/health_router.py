from datetime import datetime, timezone

from fastapi import APIRouter

from model.schema import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="Server is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
