"""Event sink consumed by the engine.

The core only emits these events; formatting belongs to the implementation.
"""

from abc import ABC, abstractmethod

from sqliprobe.core.models import Baseline, Category, ScanReport, Settings, Target, VulnerabilityFinding


class Reporter(ABC):
    verbose: int = 1
    PAY: str = ""  # payload highlight prefix

    @abstractmethod
    def run_start(self, target: Target, settings: Settings) -> None: ...

    @abstractmethod
    def calibrated(self, baseline: Baseline) -> None: ...

    @abstractmethod
    def category_start(self, category: Category, payload_count: int, chunk_count: int) -> None: ...

    @abstractmethod
    def finding(self, finding: VulnerabilityFinding) -> None: ...

    @abstractmethod
    def error(self, category: Category, payload: str, exc: Exception) -> None:
        """A per-payload error that was absorbed by a worker."""
        ...

    @abstractmethod
    def summary(self, report: ScanReport) -> None: ...

    def info(self, msg: str) -> None:
        pass

    def debug(self, msg: str) -> None:
        pass
