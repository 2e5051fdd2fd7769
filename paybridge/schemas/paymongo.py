from typing import Optional

from pydantic import BaseModel, Field


class Billing(BaseModel):
    email: Optional[str] = None


class ResourceAttributes(BaseModel):
    status: Optional[str] = None
    # minor units (centavos)
    amount: Optional[int] = None
    billing: Optional[Billing] = None


class ResourceWrapper(BaseModel):
    id: Optional[str] = None
    type: Optional[str] = None
    attributes: Optional[ResourceAttributes] = None


class EventAttributes(ResourceAttributes):
    type: Optional[str] = None
    resource_type: Optional[str] = None
    resource_id: Optional[str] = None
    resource: Optional[ResourceWrapper] = Field(None, alias="data")


class EventData(BaseModel):
    id: Optional[str] = None
    attributes: Optional[EventAttributes] = None


class PayMongoEvent(BaseModel):
    data: Optional[EventData] = None
