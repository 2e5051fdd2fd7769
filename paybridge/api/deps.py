from fastapi import Request

from paybridge.core.config import Settings
from paybridge.services.payments.signature import SignatureVerifier
from paybridge.services.reconciliation.dispatcher import ReconciliationDispatcher
from paybridge.services.status.store import PaymentStatusStore


# instances are built by create_app() and live on app.state
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_verifier(request: Request) -> SignatureVerifier:
    return request.app.state.verifier


def get_store(request: Request) -> PaymentStatusStore:
    return request.app.state.store


def get_dispatcher(request: Request) -> ReconciliationDispatcher:
    return request.app.state.dispatcher
