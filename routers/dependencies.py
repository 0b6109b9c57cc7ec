from fastapi import Request

from services.hubspot_client import HubSpotClient
from services.insight_service import InsightModel


def get_crm_client(request: Request) -> HubSpotClient:
    return request.app.state.crm


def get_insight_model(request: Request) -> InsightModel:
    return request.app.state.insight_model
