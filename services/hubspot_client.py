import logging
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import httpx

from config.settings import Settings
from services.errors import UpstreamError
from static.hubspot_fields import (
    CONTACT_PROPERTIES,
    DEAL_PROPERTIES,
    DEAL_TO_CONTACT_ASSOCIATION,
    LIST_PAGE_SIZE,
)

logger = logging.getLogger(__name__)


def build_http_client(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.hubspot_api_base,
        headers={
            "Authorization": f"Bearer {settings.hubspot_access_token}",
            "Content-Type": "application/json",
        },
        timeout=settings.upstream_timeout,
        transport=transport,
    )


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class HubSpotClient:
    """Thin wrapper over the HubSpot CRM v3 REST API.

    Every method returns the decoded JSON body as-is. Any non-2xx answer or
    transport failure is raised as ``UpstreamError`` carrying the upstream
    status and body.
    """

    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("HubSpot %s %s timed out", method, path)
            raise UpstreamError("Upstream request timed out", details=None, status_code=504) from e
        except httpx.HTTPError as e:
            logger.error("HubSpot %s %s failed: %s", method, path, e)
            raise UpstreamError(f"HubSpot request failed: {e}", details=None, status_code=500) from e

        if response.is_error:
            body = _error_body(response)
            message = None
            if isinstance(body, dict):
                message = body.get("message")
            message = message or f"HubSpot responded with {response.status_code}"
            logger.error("HubSpot %s %s -> %s: %s", method, path, response.status_code, message)
            logger.debug("HubSpot error body: %s", body)
            raise UpstreamError(message, details=body, status_code=response.status_code)

        if not response.content:
            return {}
        return response.json()

    async def list_contacts(self) -> Dict[str, Any]:
        params = {"limit": LIST_PAGE_SIZE, "properties": ",".join(CONTACT_PROPERTIES)}
        return await self._request("GET", "/crm/v3/objects/contacts", params=params)

    async def create_contact(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/crm/v3/objects/contacts", json={"properties": properties})

    async def list_deals(self) -> Dict[str, Any]:
        params = {"limit": LIST_PAGE_SIZE, "properties": ",".join(DEAL_PROPERTIES)}
        return await self._request("GET", "/crm/v3/objects/deals", params=params)

    async def create_deal(self, properties: Dict[str, Any], contact_id: Optional[Union[str, int]] = None) -> Dict[str, Any]:
        associations = []
        if contact_id:
            associations.append({"to": {"id": contact_id}, "types": [dict(DEAL_TO_CONTACT_ASSOCIATION)]})
        payload = {"properties": properties, "associations": associations}
        return await self._request("POST", "/crm/v3/objects/deals", json=payload)

    async def contact_deal_ids(self, contact_id: str) -> List[str]:
        path = f"/crm/v3/objects/contacts/{quote(contact_id, safe='')}/associations/deals"
        data = await self._request("GET", path)
        return [str(item["id"]) for item in data.get("results") or []]

    async def batch_read_deals(self, deal_ids: List[str]) -> Dict[str, Any]:
        payload = {
            "inputs": [{"id": deal_id} for deal_id in deal_ids],
            "properties": list(DEAL_PROPERTIES),
        }
        return await self._request("POST", "/crm/v3/objects/deals/batch/read", json=payload)

    async def deal_pipelines(self) -> Dict[str, Any]:
        return await self._request("GET", "/crm/v3/pipelines/deals")
