"""Error taxonomy for the probe.

Configuration and calibration errors are fatal and abort the run.
Transport errors are fatal only while calibrating; during payload
dispatch they are reported and the payload is skipped.
"""

from typing import Optional


class ProbeError(Exception):
    """Base class for every error raised by sqliprobe."""


class ConfigurationError(ProbeError, ValueError):
    """Malformed header, unparsable URL, unsupported method, bad setting."""


class TransportError(ProbeError):
    """Connection failure, timeout or malformed response for one request."""

    def __init__(self, message: str, payload: Optional[str] = None):
        super().__init__(message)
        self.payload = payload


class CalibrationInconsistency(ProbeError):
    """Baseline samples came back with different status codes."""

    def __init__(self, expected: int, received: int):
        super().__init__(
            f"status code mismatch between calibration samples "
            f"(expected {expected}, received {received})")
        self.expected = expected
        self.received = received
