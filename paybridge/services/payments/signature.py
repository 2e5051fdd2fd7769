from typing import Optional, Set, Tuple
import hmac
import hashlib
import time


def parse_signature_header(signature_header: str) -> Tuple[Optional[str], Set[str]]:
    """split `t=<unix>,s=<hex>[,s=<hex>...]` into (timestamp, signatures).

    the last `t` wins, every `s` is collected. pairs without a value are skipped.
    """
    timestamp: Optional[str] = None
    signatures: Set[str] = set()
    for part in signature_header.split(","):
        key, sep, value = part.partition("=")
        key, value = key.strip(), value.strip()
        if not sep or not key or not value:
            continue
        if key == "t":
            timestamp = value
        elif key.lower() == "s":
            signatures.add(value.lower())
    return timestamp, signatures


def compute_signature(timestamp: str, payload: bytes, secret: str) -> str:
    signed = b"t=" + timestamp.encode() + b"." + payload
    return hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()


def _within_tolerance(timestamp: str, tolerance: int, now: Optional[float]) -> bool:
    try:
        sent_at = int(timestamp)
    except ValueError:
        return False
    current = time.time() if now is None else now
    return abs(current - sent_at) <= tolerance


class SignatureVerifier:
    """checks that a webhook body was signed with the shared secret.

    `payload` must be the exact request body; re-encoding parsed JSON changes
    the bytes and breaks the digest.
    """

    def __init__(self, tolerance: int = 0):
        # 0 means no replay window
        self.tolerance = tolerance

    def verify(self, signature_header: str | None, payload: bytes, secret: str | None, now: Optional[float] = None) -> bool:
        if not signature_header or not signature_header.strip():
            return False
        if not secret or not secret.strip():
            return False

        timestamp, signatures = parse_signature_header(signature_header)
        if timestamp is None or not signatures:
            return False
        if self.tolerance > 0 and not _within_tolerance(timestamp, self.tolerance, now):
            return False

        expected = compute_signature(timestamp, payload, secret)
        matched = False
        # check every candidate so timing doesn't reveal which one matched
        for candidate in signatures:
            if hmac.compare_digest(expected.encode(), candidate.encode()):
                matched = True
        return matched
