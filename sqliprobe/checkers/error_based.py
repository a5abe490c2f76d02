from typing import Iterable, Optional

from sqliprobe.checkers.base import BaseChecker
from sqliprobe.core.models import Baseline, Category, ProbeResponse, VulnerabilityFinding


class ErrorBased(BaseChecker):
    """
    Error-based blind SQLi.

    A textual database error leaking into the body wins; a 5xx without any
    matching signature is still reported, as status-based.
    """

    category = Category.ERROR_BASED

    @staticmethod
    def match(body: str, signatures: Iterable[str]) -> Optional[str]:
        low = (body or "").lower()
        for sig in signatures:
            if sig in low:
                return sig
        return None

    def classify(self, response: ProbeResponse, signatures: Iterable[str]) -> bool:
        return self.match(response.body, signatures) is not None or response.status_code >= 500

    def check(self, response: ProbeResponse, baseline: Baseline) -> Optional[VulnerabilityFinding]:
        sig = self.match(response.body, baseline.signatures)
        if sig is not None:
            return VulnerabilityFinding(Category.ERROR_BASED, response.payload, sig)
        if response.status_code >= 500:
            return VulnerabilityFinding(Category.STATUS_BASED, response.payload, response.status_code)
        return None
