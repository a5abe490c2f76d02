"""Abstract base for the detectors."""

from abc import ABC, abstractmethod
from typing import Optional

from sqliprobe.core.models import Baseline, Category, ProbeResponse, VulnerabilityFinding


class BaseChecker(ABC):
    """Every checker classifies one response against the finalized baseline."""

    category: Category

    @abstractmethod
    def check(
        self,
        response: ProbeResponse,
        baseline: Baseline,
    ) -> Optional[VulnerabilityFinding]:
        """
        Inspect *response* (injected) using *baseline* (calibration output).
        Return a VulnerabilityFinding if the payload triggered, else None.
        """
        ...
