"""
Forwards terminal payment status changes to the POS.

Dispatch runs after the snapshot is committed to the store and never touches
it again: a POS failure is logged and queued for retry, the snapshot stays.
Delivered (source, status) pairs are remembered so redeliveries and retries
reach the POS at most once per pair. The retry queue holds at most one request
per pair. Like the store, all of this is in memory: the delivered set grows by
one entry per terminal (source, status) for the life of the process and is
lost on restart.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from paybridge.core.errors import DispatchFailure
from paybridge.schemas.payments import BackToPosRequest
from paybridge.services.pos.base import POSAdapter
from paybridge.services.status.store import PaymentStatusSnapshot

logger = logging.getLogger(__name__)

SKIPPED = "skipped"
DUPLICATE = "duplicate"
DELIVERED = "delivered"
FAILED = "failed"


@dataclass(frozen=True)
class DispatchOutcome:
    status: str
    request: Optional[BackToPosRequest] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != FAILED


def build_request(snapshot: PaymentStatusSnapshot) -> BackToPosRequest:
    return BackToPosRequest(
        source_id=snapshot.source_id,
        status=snapshot.status,
        customer_email=snapshot.customer_email,
        amount=snapshot.amount,
    )


class ReconciliationDispatcher:
    def __init__(self, pos: POSAdapter, terminal_statuses: Iterable[str], max_attempts: int = 1):
        self.pos = pos
        self.terminal_statuses = {s.strip().lower() for s in terminal_statuses if s and s.strip()}
        self.max_attempts = max(1, max_attempts)
        self._delivered: Set[Tuple[str, str]] = set()
        self._in_flight: Set[Tuple[str, str]] = set()
        self._retry_queue: Dict[Tuple[str, str], BackToPosRequest] = {}
        self._lock = threading.Lock()

    def is_terminal(self, status: str) -> bool:
        return (status or "").strip().lower() in self.terminal_statuses

    @staticmethod
    def _dedupe_key(request: BackToPosRequest) -> Tuple[str, str]:
        return (request.source_id or "").casefold(), (request.status or "").lower()

    @property
    def pending_retries(self) -> List[BackToPosRequest]:
        with self._lock:
            return list(self._retry_queue.values())

    @property
    def has_pending_retries(self) -> bool:
        with self._lock:
            return bool(self._retry_queue)

    def maybe_dispatch(self, snapshot: PaymentStatusSnapshot) -> DispatchOutcome:
        if not self.is_terminal(snapshot.status):
            return DispatchOutcome(status=SKIPPED)
        return self._dispatch(build_request(snapshot))

    def retry_failed(self) -> List[DispatchOutcome]:
        with self._lock:
            queued, self._retry_queue = list(self._retry_queue.values()), {}
        if queued:
            logger.info(f"Retrying {len(queued)} failed POS dispatch(es)")
        return [self._dispatch(request) for request in queued]

    def _claim(self, key: Tuple[str, str]) -> bool:
        with self._lock:
            if key in self._delivered or key in self._in_flight:
                return False
            self._in_flight.add(key)
            return True

    def _dispatch(self, request: BackToPosRequest) -> DispatchOutcome:
        key = self._dedupe_key(request)
        if not self._claim(key):
            return DispatchOutcome(status=DUPLICATE, request=request)

        try:
            self._deliver(request)
        except DispatchFailure as e:
            logger.error(f"POS dispatch failed for source {request.source_id} ({request.status}): {e}")
            with self._lock:
                self._in_flight.discard(key)
                self._retry_queue[key] = request
            return DispatchOutcome(status=FAILED, request=request, error=str(e))

        with self._lock:
            self._in_flight.discard(key)
            self._delivered.add(key)
            self._retry_queue.pop(key, None)
        logger.info(f"POS notified of status {request.status} for source {request.source_id}")
        return DispatchOutcome(status=DELIVERED, request=request)

    def _deliver(self, request: BackToPosRequest) -> None:
        last_error = "no attempt made"
        for attempt in range(1, self.max_attempts + 1):
            try:
                res = self.pos.accept(request)
            except Exception as e:
                last_error = f"{type(e).__name__}: {e}"
            else:
                if isinstance(res, dict) and res.get("status") == "ok":
                    return
                last_error = f"POS rejected request: {res}"
            logger.warning(f"POS attempt {attempt}/{self.max_attempts} failed for source {request.source_id}: {last_error}")
        raise DispatchFailure(last_error)
