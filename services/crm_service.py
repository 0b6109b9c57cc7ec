import logging
from typing import Any, Dict, List

from model.schema import DealStage
from services.errors import NotFoundError
from services.hubspot_client import HubSpotClient

logger = logging.getLogger(__name__)


async def deals_for_contact(crm: HubSpotClient, contact_id: str) -> Dict[str, Any]:
    """Resolve a contact's deal associations, then hydrate them in one batch read.

    HubSpot rejects an empty batch, so no second call is made when the
    contact has no deals.
    """
    deal_ids = await crm.contact_deal_ids(contact_id)
    if not deal_ids:
        return {"results": []}

    logger.debug("Contact %s has %d associated deals", contact_id, len(deal_ids))
    return await crm.batch_read_deals(deal_ids)


async def first_pipeline_stages(crm: HubSpotClient) -> List[DealStage]:
    # Only the first pipeline (usually "default") is considered.
    data = await crm.deal_pipelines()
    pipelines = data.get("results") or []
    if not pipelines:
        raise NotFoundError("No deal pipelines found")

    return [
        DealStage(id=str(stage["id"]), label=stage["label"])
        for stage in pipelines[0].get("stages") or []
    ]
