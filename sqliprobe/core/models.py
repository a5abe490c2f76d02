"""Shared data models for the probe."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


class BodyType(str, Enum):
    """How parameters are encoded for POST / PUT / PATCH."""
    JSON = "json"
    FORM = "form"
    RAW = "raw"


class Category(str, Enum):
    TIME_BASED = "time-based"
    ERROR_BASED = "error-based"
    STATUS_BASED = "status-based"


@dataclass(frozen=True)
class Settings:
    """Caller-provided scan settings, validated when the Target is built."""
    url: str
    method: str = "GET"
    headers: Tuple[str, ...] = ()      # raw "key: value"
    cookies: Tuple[str, ...] = ()      # raw "name=value"
    params: Tuple[str, ...] = ()       # parameter names to fuzz
    data: Tuple[str, ...] = ()         # static "key=value"
    body_type: BodyType = BodyType.RAW
    offset_samples: int = 0
    offset: int = 0                    # ms, only used when offset_samples == 0
    workers: int = 4
    filtering: bool = True
    proxy: Optional[str] = None
    verify_tls: bool = False


@dataclass(frozen=True)
class Target:
    """Immutable request template shared by every worker."""
    url: str
    method: str
    headers: Tuple[Tuple[str, str], ...] = ()
    cookies: Tuple[str, ...] = ()
    params: Tuple[str, ...] = ()
    data: Tuple[Tuple[str, str], ...] = ()
    body_type: BodyType = BodyType.RAW

    @property
    def cookie_header(self) -> Optional[str]:
        if not self.cookies:
            return None
        return "; ".join(self.cookies)

    def build_params(self, payload: str) -> dict:
        """Fuzzed names map to *payload*; static values are applied last."""
        mp = {name: payload for name in self.params}
        for key, value in self.data:
            mp[key] = value
        return mp


@dataclass(frozen=True)
class ProbeResponse:
    """What a detector gets to see from one request."""
    payload: str
    status_code: int
    body: str
    elapsed_ms: int


@dataclass(frozen=True)
class Baseline:
    """Calibration output, finalized before any worker starts."""
    offset_ms: int = 0
    signatures: Tuple[str, ...] = ()


@dataclass(frozen=True)
class VulnerabilityFinding:
    """A single positive detection."""
    category: Category
    payload: str
    evidence: Union[int, str]  # elapsed ms, matched signature or status code

    @property
    def evidence_label(self) -> str:
        return {
            Category.TIME_BASED: "Response time",
            Category.ERROR_BASED: "Error",
            Category.STATUS_BASED: "Status code",
        }[self.category]

    def __str__(self):
        return (f"[{self.category.value}] payload={self.payload!r} "
                f"{self.evidence_label.lower()}={self.evidence}")


@dataclass
class CategoryVerdict:
    """Aggregated result of dispatching one payload catalog."""
    category: Category
    findings: List[VulnerabilityFinding] = field(default_factory=list)
    errors: int = 0

    @property
    def vulnerable(self) -> bool:
        return bool(self.findings)

    def __bool__(self):
        return self.vulnerable


@dataclass
class ScanReport:
    baseline: Baseline
    time_based: CategoryVerdict
    error_based: CategoryVerdict

    @property
    def vulnerable(self) -> bool:
        return self.time_based.vulnerable or self.error_based.vulnerable

    @property
    def findings(self) -> List[VulnerabilityFinding]:
        return self.time_based.findings + self.error_based.findings
