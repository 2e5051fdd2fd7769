from typing import Any, Dict

from paybridge.schemas.payments import BackToPosRequest


class POSAdapter:
    """base interface for handing payment status changes to the POS."""

    name = "base"

    def accept(self, request: BackToPosRequest) -> Dict[str, Any]:  # pragma: no cover
        return {"status": "skipped", "reason": "not_implemented"}

    def health_check(self) -> Dict[str, str]:
        return {"status": "configured", "provider": self.name}
