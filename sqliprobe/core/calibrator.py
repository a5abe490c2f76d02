"""Baseline calibration: latency offset and error-signature filtering.

Both steps run sequentially, before any payload is dispatched, and any
failure here is fatal for the run.
"""

import random
import string
from typing import Iterable, Optional, Tuple

from sqliprobe.core.errors import CalibrationInconsistency, ConfigurationError
from sqliprobe.core.models import Baseline


def _rand(lo: int = 4, hi: int = 10) -> str:
    """Random alphanumeric string, length in [lo, hi)."""
    abc = string.ascii_letters + string.digits
    return "".join(random.choice(abc) for _ in range(random.randrange(lo, hi)))


def normalize_signatures(catalog: Iterable[str]) -> Tuple[str, ...]:
    """Lower-case, strip and de-duplicate, keeping catalog order."""
    out = []
    for sig in catalog:
        sig = sig.strip().lower()
        if sig and sig not in out:
            out.append(sig)
    return tuple(out)


class Calibrator:
    def __init__(self, client, logger=None):
        self.client = client
        self.logger = logger

    def calibrate(self, samples: int) -> int:
        """
        Average response time in ms over *samples* sequential requests
        (integer division). 0 samples disables calibration.

        Raises CalibrationInconsistency if the samples disagree on the
        status code; TransportError propagates untouched.
        """
        if samples < 0:
            raise ConfigurationError("offset samples must be non-negative")
        if samples == 0:
            return 0

        total = 0
        expected: Optional[int] = None
        for i in range(samples):
            resp = self.client.send(_rand())
            total += resp.elapsed_ms
            if self.logger:
                self.logger.debug(
                    f"Calibration sample {i + 1}/{samples}: "
                    f"{resp.elapsed_ms} ms (HTTP {resp.status_code})")
            if expected is None:
                expected = resp.status_code
            elif resp.status_code != expected:
                raise CalibrationInconsistency(expected, resp.status_code)

        return total // samples

    def filter_signatures(self, catalog: Iterable[str], apply: bool) -> Tuple[str, ...]:
        """Drop every signature already present in a vanilla response body."""
        signatures = normalize_signatures(catalog)
        if not apply:
            return signatures

        if self.logger:
            self.logger.info("Filtering error signatures using a vanilla request...")
        vanilla = self.client.send("").body.lower()
        kept = tuple(sig for sig in signatures if sig not in vanilla)

        if self.logger:
            for sig in signatures:
                if sig not in kept:
                    self.logger.debug(f"  signature present in vanilla body, dropped: {sig!r}")
        return kept

    def baseline(self, samples: int, offset: int, catalog: Iterable[str],
                 filtering: bool) -> Baseline:
        """Run both calibration steps; *offset* applies only when samples == 0."""
        offset_ms = self.calibrate(samples) if samples else offset
        return Baseline(
            offset_ms=offset_ms,
            signatures=self.filter_signatures(catalog, filtering),
        )
