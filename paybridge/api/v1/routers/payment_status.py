import logging

from fastapi import APIRouter, Depends, HTTPException

from paybridge.api.deps import get_store
from paybridge.schemas.payments import BackToPosRequest, PaymentStatusOut
from paybridge.services.status.store import PaymentStatusStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payment-status", tags=["payment-status"])

# status recorded when the POS confirms a source without naming one
DEFAULT_POS_STATUS = "chargeable"


@router.get("/{source_id}", response_model=PaymentStatusOut)
def get_payment_status(source_id: str, store: PaymentStatusStore = Depends(get_store)):
    snapshot = store.try_get(source_id)
    if snapshot is None:
        raise HTTPException(status_code=404, detail="Payment status not found")
    return PaymentStatusOut.model_validate(snapshot)


@router.post("/back-to-pos")
def back_to_pos(payload: BackToPosRequest, store: PaymentStatusStore = Depends(get_store)):
    """let the POS push a status for a source it handled itself."""
    if not payload.source_id or not payload.source_id.strip():
        raise HTTPException(status_code=400, detail="sourceId is required")

    snapshot = store.upsert(
        payload.source_id.strip(),
        payload.status or DEFAULT_POS_STATUS,
        payload.customer_email,
        payload.amount,
    )
    logger.info(f"POS set status {snapshot.status} for source {snapshot.source_id}")
    return {"message": "Status updated"}
