"""
Event normalization tests.
"""
import json
from decimal import Decimal

import pytest

from conftest import source_event
from paybridge.core.errors import MalformedPayload, NormalizationError
from paybridge.schemas.paymongo import EventAttributes
from paybridge.services.payments.normalizer import (
    DirectResource,
    WrappedResource,
    minor_to_amount,
    normalize,
    resolve_resource,
)


def direct_event(**attrs):
    return {"data": {"id": "evt_direct", "attributes": attrs}}


class TestNestedResolution:
    def test_wrapped_status_takes_precedence(self):
        body = {
            "data": {
                "id": "evt_1",
                "attributes": {
                    "status": "pending",
                    "amount": 100,
                    "billing": {"email": "top@example.com"},
                    "resource_type": "source",
                    "resource_id": "src_1",
                    "data": {
                        "id": "src_1",
                        "type": "source",
                        "attributes": {"status": "paid", "amount": 1050, "billing": {"email": "nested@example.com"}},
                    },
                },
            }
        }
        event = normalize(body)
        assert event.status == "paid"
        assert event.amount == Decimal("10.50")
        assert event.customer_email == "nested@example.com"

    def test_direct_attributes_used_without_wrapper(self):
        event = normalize(direct_event(status="pending", amount=2500, resource_type="source", resource_id="src_2"))
        assert event.source_id == "src_2"
        assert event.status == "pending"
        assert event.amount == Decimal("25.00")
        assert event.is_source_event

    def test_wrapped_resource_does_not_redefine_identity(self):
        body = source_event(source_id="src_wrapped")
        body["data"]["attributes"]["resource_id"] = "src_event"
        assert normalize(body).source_id == "src_event"

    def test_wrapper_id_used_when_event_has_no_identity(self):
        event = normalize(source_event(source_id="src_only_wrapper"))
        assert event.source_id == "src_only_wrapper"
        assert event.resource_type == "source"
        assert event.event_type == "source.chargeable"

    def test_resolve_resource_variants(self):
        wrapped = EventAttributes.model_validate({"data": {"id": "src_1", "attributes": {"status": "paid"}}})
        direct = EventAttributes.model_validate({"status": "pending"})
        assert isinstance(resolve_resource(wrapped), WrappedResource)
        assert isinstance(resolve_resource(direct), DirectResource)

    def test_wrapper_without_attributes_falls_back_to_top_level(self):
        body = direct_event(status="failed", data={"id": "src_3", "type": "source"})
        event = normalize(body)
        assert event.status == "failed"
        assert event.source_id == "src_3"


class TestAmounts:
    def test_minor_units_divided_by_hundred(self):
        assert normalize(source_event(amount=1050)).amount == Decimal("10.50")

    def test_absent_amount_is_none_not_zero(self):
        assert normalize(source_event(amount=None)).amount is None

    def test_zero_amount_kept(self):
        assert minor_to_amount(0) == Decimal("0")


class TestPassThrough:
    def test_absent_status_left_empty(self):
        assert normalize(source_event(status=None)).status == ""

    def test_absent_billing(self):
        assert normalize(source_event(email=None)).customer_email is None

    def test_accepts_raw_bytes(self):
        raw = json.dumps(source_event(status="paid")).encode()
        assert normalize(raw).status == "paid"

    def test_non_source_event_flagged(self):
        event = normalize(direct_event(status="paid", resource_type="payment", resource_id="pay_1"))
        assert not event.is_source_event


class TestMalformed:
    @pytest.mark.parametrize(
        "raw",
        [
            b"not json",
            b"[]",
            b'{"data": "nope"}',
            b'{"data": {"attributes": {"amount": "lots"}}}',
        ],
    )
    def test_unparseable_envelope(self, raw):
        with pytest.raises(NormalizationError):
            normalize(raw)

    def test_missing_attributes(self):
        with pytest.raises(NormalizationError):
            normalize({"id": "evt_1"})

    def test_missing_source_id(self):
        with pytest.raises(MalformedPayload):
            normalize(direct_event(status="paid", resource_type="source"))
