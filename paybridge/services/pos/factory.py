from paybridge.core.config import Settings
from .base import POSAdapter
from .http import HttpPOS
from .mock import MockPOS


def get_pos_adapter(settings: Settings) -> POSAdapter:
    provider = (settings.POS_PROVIDER or "mock").lower()
    if provider == "http":
        return HttpPOS(settings.POS_CALLBACK_URL, timeout=settings.POS_TIMEOUT_SECONDS)
    # default to mock
    return MockPOS()
