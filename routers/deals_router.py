from typing import List

from fastapi import APIRouter, Depends

from model.schema import CreateDealRequest, DealStage
from routers.dependencies import get_crm_client
from services.crm_service import first_pipeline_stages
from services.hubspot_client import HubSpotClient

router = APIRouter(prefix="/api", tags=["deals"])


@router.get("/deals")
async def list_deals(crm: HubSpotClient = Depends(get_crm_client)):
    return await crm.list_deals()


@router.post("/deals")
async def create_deal(request: CreateDealRequest, crm: HubSpotClient = Depends(get_crm_client)):
    properties = request.dealProperties.model_dump(exclude_unset=True)
    return await crm.create_deal(properties, request.contactId)


@router.get("/deal-stages", response_model=List[DealStage])
async def list_deal_stages(crm: HubSpotClient = Depends(get_crm_client)):
    return await first_pipeline_stages(crm)
