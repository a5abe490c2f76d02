from typing import Iterable, Sequence

import httpx

from sqliprobe.checkers.error_based import ErrorBased
from sqliprobe.checkers.time_based import TimeBased
from sqliprobe.core.calibrator import Calibrator
from sqliprobe.core.client import TargetClient
from sqliprobe.core.dispatcher import Dispatcher
from sqliprobe.core.models import ScanReport, Settings
from sqliprobe.parsers.request import build_target


class Engine:
    """
    Two-phase run against a single target: calibrate once, then dispatch
    the time-based catalog followed by the error-based catalog.
    """

    def __init__(self, settings: Settings, logger=None,
                 transport: httpx.BaseTransport | None = None, client=None):
        self.settings = settings
        self.logger = logger
        self.target = build_target(settings)
        self.client = client or TargetClient(
            self.target, proxy=settings.proxy, verify=settings.verify_tls,
            transport=transport, logger=logger, pool_size=settings.workers)

    def scan(self, time_payloads: Sequence[str], error_payloads: Sequence[str],
             signatures: Iterable[str]) -> ScanReport:
        s = self.settings
        if self.logger:
            self.logger.run_start(self.target, s)

        baseline = Calibrator(self.client, self.logger).baseline(
            s.offset_samples, s.offset, signatures, s.filtering)
        if self.logger:
            self.logger.calibrated(baseline)

        dispatcher = Dispatcher(self.client, baseline, self.logger)
        report = ScanReport(
            baseline=baseline,
            time_based=dispatcher.run(TimeBased(), time_payloads, s.workers),
            error_based=dispatcher.run(ErrorBased(), error_payloads, s.workers),
        )

        if self.logger:
            self.logger.summary(report)
        return report

    def close(self) -> None:
        if hasattr(self.client, "close"):
            self.client.close()

    def __enter__(self) -> "Engine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
