import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Optional

UNKNOWN_STATUS = "unknown"


@dataclass(frozen=True)
class PaymentStatusSnapshot:
    source_id: str
    status: str
    updated_at: datetime
    customer_email: Optional[str]
    amount: Optional[Decimal]


class PaymentStatusStore:
    """latest known status per payment source, kept in memory.

    keys are matched case-insensitively. every upsert replaces the whole
    snapshot, so the last call wins regardless of event order.
    """

    def __init__(self):
        self._statuses: Dict[str, PaymentStatusSnapshot] = {}
        # guards single dict operations only, never held across I/O
        self._lock = threading.Lock()

    @staticmethod
    def _key(source_id: str) -> str:
        return source_id.casefold()

    def upsert(
        self,
        source_id: str,
        status: Optional[str],
        email: Optional[str] = None,
        amount: Optional[Decimal] = None,
    ) -> PaymentStatusSnapshot:
        snapshot = PaymentStatusSnapshot(
            source_id=source_id,
            status=status if status and status.strip() else UNKNOWN_STATUS,
            updated_at=datetime.now(timezone.utc),
            customer_email=email,
            amount=amount,
        )
        with self._lock:
            self._statuses[self._key(source_id)] = snapshot
        return snapshot

    def try_get(self, source_id: str) -> Optional[PaymentStatusSnapshot]:
        with self._lock:
            return self._statuses.get(self._key(source_id))

    def __len__(self) -> int:
        with self._lock:
            return len(self._statuses)
