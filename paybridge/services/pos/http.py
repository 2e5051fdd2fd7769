from typing import Any, Dict

import httpx

from .base import POSAdapter
from paybridge.schemas.payments import BackToPosRequest


class HttpPOS(POSAdapter):
    """posts status changes as JSON to the POS callback endpoint."""

    name = "http"

    def __init__(self, callback_url: str | None, timeout: float = 5.0, client: httpx.Client | None = None):
        self.callback_url = callback_url
        self.timeout = timeout
        self._client = client

    def health_check(self) -> Dict[str, str]:
        if not self.callback_url:
            return {"status": "misconfigured", "reason": "missing_callback_url"}
        return {"status": "configured", "provider": self.name}

    def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return self._client.post(self.callback_url, json=payload, timeout=self.timeout)
        return httpx.post(self.callback_url, json=payload, timeout=self.timeout)

    def accept(self, request: BackToPosRequest) -> Dict[str, Any]:
        if not self.callback_url:
            return {"status": "skipped", "reason": "pos_callback_not_configured"}
        try:
            r = self._post(request.model_dump(mode="json", by_alias=True))
        except httpx.HTTPError as e:
            return {"status": "error", "reason": f"request_failed: {e}"}
        if r.is_success:
            return {"status": "ok", "code": r.status_code}
        return {"status": "error", "code": r.status_code}
