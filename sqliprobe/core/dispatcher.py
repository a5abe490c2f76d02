from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from sqliprobe.checkers.base import BaseChecker
from sqliprobe.core.errors import ConfigurationError, TransportError
from sqliprobe.core.models import Baseline, CategoryVerdict, VulnerabilityFinding


def chunk_payloads(payloads: Sequence[str], workers: int) -> List[List[str]]:
    """
    Split *payloads* into contiguous chunks, one per worker.

    Chunk size is len // workers and the last chunk takes the remainder.
    With more workers than payloads everything goes into a single chunk.
    """
    if workers < 1:
        raise ConfigurationError("workers must be a positive integer")
    items = list(payloads)
    if not items:
        return []
    if workers > len(items):
        return [items]

    size = len(items) // workers
    chunks = [items[i * size:(i + 1) * size] for i in range(workers - 1)]
    chunks.append(items[(workers - 1) * size:])
    return chunks


class Dispatcher:
    """
    Runs one payload catalog through a checker with concurrent workers.

    Each worker walks its own chunk in order and stops at its first hit.
    Workers are never cancelled by each other's hits; the category verdict
    is the OR of every worker's result once all of them have joined.
    """

    def __init__(self, client, baseline: Baseline, reporter=None):
        self.client = client
        self.baseline = baseline
        self.reporter = reporter

    def run(self, checker: BaseChecker, payloads: Sequence[str], workers: int) -> CategoryVerdict:
        chunks = chunk_payloads(payloads, workers)
        verdict = CategoryVerdict(category=checker.category)
        if self.reporter:
            self.reporter.category_start(checker.category, len(payloads), len(chunks))
        if not chunks:
            return verdict

        with ThreadPoolExecutor(max_workers=len(chunks)) as ex:
            futures = [ex.submit(self._work, checker, chunk) for chunk in chunks]
        for fut in futures:
            finding, errors = fut.result()
            verdict.errors += errors
            if finding is not None:
                verdict.findings.append(finding)
        return verdict

    def _work(self, checker: BaseChecker, chunk: List[str]) -> Tuple[Optional[VulnerabilityFinding], int]:
        errors = 0
        for payload in chunk:
            try:
                resp = self.client.send(payload)
            except TransportError as exc:
                errors += 1
                if self.reporter:
                    self.reporter.error(checker.category, payload, exc)
                continue

            finding = checker.check(resp, self.baseline)
            if finding is not None:
                if self.reporter:
                    self.reporter.finding(finding)
                return finding, errors
        return None, errors
