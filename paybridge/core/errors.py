class BridgeError(Exception):
    """base class for every failure the bridge reports explicitly."""


class AuthenticationFailure(BridgeError):
    """delivery signature is missing, malformed or does not match."""


class MalformedPayload(BridgeError):
    """delivery body can't be decoded or lacks the source identity."""


class NormalizationError(MalformedPayload):
    """raised by the event normalizer for envelopes it can't resolve."""


class DispatchFailure(BridgeError):
    """POS callback failed; the stored snapshot stays as it is."""


class ConfigurationError(BridgeError):
    """required configuration (e.g. the webhook secret) is missing."""
