from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


class BackToPosRequest(BaseModel):
    # the POS speaks camelCase (sourceId, customerEmail)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    source_id: Optional[str] = None
    status: Optional[str] = None
    customer_email: Optional[str] = None
    amount: Optional[Decimal] = None

    @field_serializer("amount")
    def _amount_as_number(self, amount: Optional[Decimal]) -> Optional[float]:
        return float(amount) if amount is not None else None


class PaymentStatusOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    source_id: str
    status: str
    updated_at: datetime
    customer_email: Optional[str] = None
    amount: Optional[Decimal] = None

    @field_serializer("amount")
    def _amount_as_number(self, amount: Optional[Decimal]) -> Optional[float]:
        return float(amount) if amount is not None else None


class WebhookAck(BaseModel):
    status: str
    source_id: Optional[str] = None
    payment_status: Optional[str] = None
