from typing import Any, Dict, List

from .base import POSAdapter
from paybridge.schemas.payments import BackToPosRequest


class MockPOS(POSAdapter):
    name = "mock"

    def __init__(self):
        self.received: List[BackToPosRequest] = []

    def accept(self, request: BackToPosRequest) -> Dict[str, Any]:
        self.received.append(request)
        return {"status": "ok", "external_pos_id": f"mock-{request.source_id}"}
