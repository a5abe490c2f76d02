from typing import Optional

from sqliprobe.checkers.base import BaseChecker
from sqliprobe.core.models import Baseline, Category, ProbeResponse, VulnerabilityFinding

DELAY_THRESHOLD_MS = 5000


class TimeBased(BaseChecker):
    """
    Time-based blind SQLi: the payloads ask the database to sleep, so a
    response slower than the fixed margin plus the calibrated offset is a hit.
    """

    category = Category.TIME_BASED

    def __init__(self, threshold_ms: int = DELAY_THRESHOLD_MS):
        self.threshold_ms = threshold_ms

    def classify(self, elapsed_ms: int, offset: int) -> bool:
        return elapsed_ms > self.threshold_ms + offset

    def check(self, response: ProbeResponse, baseline: Baseline) -> Optional[VulnerabilityFinding]:
        if self.classify(response.elapsed_ms, baseline.offset_ms):
            return VulnerabilityFinding(self.category, response.payload, response.elapsed_ms)
        return None
