import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request

from paybridge.api.deps import get_dispatcher, get_settings, get_store, get_verifier
from paybridge.core.config import Settings
from paybridge.core.errors import ConfigurationError, NormalizationError
from paybridge.schemas.payments import WebhookAck
from paybridge.services.payments.normalizer import normalize
from paybridge.services.payments.signature import SignatureVerifier
from paybridge.services.reconciliation.dispatcher import ReconciliationDispatcher
from paybridge.services.status.store import PaymentStatusStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/paymongo", tags=["paymongo"])

SIGNATURE_HEADER = "Paymongo-Signature"


def _require_secret(settings: Settings) -> str:
    if not settings.webhook_secret_configured:
        raise ConfigurationError("PAYMONGO_WEBHOOK_SECRET is not configured")
    return settings.PAYMONGO_WEBHOOK_SECRET


@router.post("/webhook", response_model=WebhookAck, response_model_exclude_none=True)
async def paymongo_webhook(
    request: Request,
    background: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    verifier: SignatureVerifier = Depends(get_verifier),
    store: PaymentStatusStore = Depends(get_store),
    dispatcher: ReconciliationDispatcher = Depends(get_dispatcher),
):
    """
    Receive PayMongo source status updates.

    The body is verified as raw bytes before any JSON decoding. Rejected
    deliveries leave the store untouched.
    """
    try:
        secret = _require_secret(settings)
    except ConfigurationError as e:
        logger.error(f"Rejecting PayMongo webhook: {e}")
        raise HTTPException(status_code=500, detail="Webhook secret not configured")

    # 1) raw body, never request.json()
    payload = await request.body()
    signature_header = request.headers.get(SIGNATURE_HEADER, "")

    # 2) check signature
    if not verifier.verify(signature_header, payload, secret):
        logger.warning(f"Invalid PayMongo signature. Header: {signature_header!r}")
        raise HTTPException(status_code=401, detail="Invalid signature")

    # 3) decode the envelope
    try:
        event = normalize(payload)
    except NormalizationError as e:
        logger.warning(f"Unable to normalize PayMongo webhook: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    if not event.is_source_event:
        logger.info(f"Ignoring non-source event type: {event.resource_type or event.event_type}")
        return WebhookAck(status="ignored")

    # 4) record and hand terminal states to the POS after responding
    snapshot = store.upsert(event.source_id, event.status, event.customer_email, event.amount)
    logger.info(f"Stored status {snapshot.status} for source {snapshot.source_id}")
    if dispatcher.has_pending_retries:
        # each accepted delivery gives earlier POS failures another go
        background.add_task(dispatcher.retry_failed)
    if dispatcher.is_terminal(snapshot.status):
        background.add_task(dispatcher.maybe_dispatch, snapshot)

    return WebhookAck(status="ok", source_id=snapshot.source_id, payment_status=snapshot.status)
