from fastapi import APIRouter, Depends

from model.schema import CreateContactRequest
from routers.dependencies import get_crm_client
from services.crm_service import deals_for_contact
from services.hubspot_client import HubSpotClient

router = APIRouter(prefix="/api/contacts", tags=["contacts"])


@router.get("")
async def list_contacts(crm: HubSpotClient = Depends(get_crm_client)):
    return await crm.list_contacts()


@router.post("")
async def create_contact(request: CreateContactRequest, crm: HubSpotClient = Depends(get_crm_client)):
    # required fields are left to the caller and to HubSpot's own validation
    return await crm.create_contact(request.properties.model_dump(exclude_unset=True))


@router.get("/{contact_id}/deals")
async def list_contact_deals(contact_id: str, crm: HubSpotClient = Depends(get_crm_client)):
    return await deals_for_contact(crm, contact_id)
