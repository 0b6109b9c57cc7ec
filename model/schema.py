from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional, Union

# HubSpot accepts numbers and booleans for most properties (epoch-ms dates,
# numeric phones), so known fields take any scalar and are forwarded as given.
PropertyValue = Optional[Union[str, int, float, bool]]


class ContactProperties(BaseModel):
    """HubSpot contact property bag. Unknown properties pass through untouched."""

    model_config = ConfigDict(extra="allow")

    firstname: PropertyValue = None
    lastname: PropertyValue = None
    email: PropertyValue = None
    jobtitle: PropertyValue = None
    company: PropertyValue = None
    phone: PropertyValue = None
    address: PropertyValue = None


class DealProperties(BaseModel):
    model_config = ConfigDict(extra="allow")

    dealname: PropertyValue = None
    amount: PropertyValue = None
    dealstage: PropertyValue = None
    closedate: PropertyValue = None
    pipeline: PropertyValue = None


class CreateContactRequest(BaseModel):
    properties: ContactProperties


class CreateDealRequest(BaseModel):
    dealProperties: DealProperties
    contactId: Optional[Union[str, int]] = None


class InsightRequest(BaseModel):
    contactData: Optional[Dict[str, Any]] = None


class DealStage(BaseModel):
    id: str
    label: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
