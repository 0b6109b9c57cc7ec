from fastapi import APIRouter, Depends

from model.schema import InsightRequest
from routers.dependencies import get_insight_model
from services.errors import InvalidRequestError
from services.insight_service import InsightModel, generate_insight

router = APIRouter(prefix="/api", tags=["insight"])


@router.post("/ai-insight")
async def ai_insight(request: InsightRequest, model: InsightModel = Depends(get_insight_model)):
    if request.contactData is None:
        raise InvalidRequestError("Missing contactData")

    return await generate_insight(model, request.contactData)
