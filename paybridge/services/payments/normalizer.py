"""
Turns PayMongo webhook envelopes into canonical payment events.

An event either describes a resource directly in `data.attributes`, or wraps
the resource under `data.attributes.data` with its own `attributes`. The
wrapped resource is authoritative for status, amount and billing email.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from paybridge.core.errors import NormalizationError
from paybridge.schemas.paymongo import EventAttributes, PayMongoEvent, ResourceAttributes


@dataclass(frozen=True)
class PaymentEvent:
    source_id: str
    # as observed, may be empty; the store applies the "unknown" default
    status: str
    amount: Optional[Decimal]
    customer_email: Optional[str]
    resource_type: Optional[str] = None
    event_type: Optional[str] = None

    @property
    def is_source_event(self) -> bool:
        return bool(self.resource_type) and self.resource_type.lower().startswith("source")


@dataclass(frozen=True)
class DirectResource:
    attributes: ResourceAttributes


@dataclass(frozen=True)
class WrappedResource:
    id: Optional[str]
    type: Optional[str]
    attributes: ResourceAttributes


Resource = Union[DirectResource, WrappedResource]


def resolve_resource(attrs: EventAttributes) -> Resource:
    wrapper = attrs.resource
    if wrapper is not None and wrapper.attributes is not None:
        return WrappedResource(id=wrapper.id, type=wrapper.type, attributes=wrapper.attributes)
    return DirectResource(attributes=attrs)


def minor_to_amount(minor: Optional[int]) -> Optional[Decimal]:
    if minor is None:
        return None
    return Decimal(minor) / Decimal(100)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _parse(envelope: Union[bytes, str, Mapping[str, Any]]) -> PayMongoEvent:
    try:
        if isinstance(envelope, (bytes, bytearray, str)):
            return PayMongoEvent.model_validate_json(envelope)
        return PayMongoEvent.model_validate(envelope)
    except ValidationError as e:
        raise NormalizationError(f"invalid envelope: {e.error_count()} error(s)") from e


def normalize(envelope: Union[bytes, str, Mapping[str, Any]]) -> PaymentEvent:
    event = _parse(envelope)
    if event.data is None or event.data.attributes is None:
        raise NormalizationError("missing data.attributes")

    attrs = event.data.attributes
    resource = resolve_resource(attrs)

    # identity belongs to the event; the wrapper only fills in when the event has none
    source_id = attrs.resource_id
    resource_type = attrs.resource_type
    if isinstance(resource, WrappedResource):
        if _blank(source_id):
            source_id = resource.id
        resource_type = resource_type or resource.type
    elif attrs.resource is not None:
        # wrapper without attributes still carries identity
        if _blank(source_id):
            source_id = attrs.resource.id
        resource_type = resource_type or attrs.resource.type

    if _blank(source_id):
        raise NormalizationError("missing source id")

    described = resource.attributes
    billing = described.billing
    return PaymentEvent(
        source_id=source_id.strip(),
        status=described.status or "",
        amount=minor_to_amount(described.amount),
        customer_email=billing.email if billing else None,
        resource_type=resource_type,
        event_type=attrs.type,
    )
