import threading
from datetime import datetime

from colorama import init as colorama_init, Fore, Style

from sqliprobe.reporters.base import Reporter

colorama_init(autoreset=True)

_CATEGORY_TITLE = {
    "time-based": "Potential time-based SQL injection detected.",
    "error-based": "Potential error-based SQL injection detected.",
    "status-based": "Potential status-based SQL injection detected.",
}


class Log(Reporter):
    def __init__(self, verbose: int = 1):
        self.verbose = verbose
        self.PAY = Fore.MAGENTA
        # workers print concurrently; keep multi-line blocks together
        self._lock = threading.Lock()

    def _time(self):
        return datetime.now().strftime("[%H:%M:%S]")

    def _fmt(self, level: str, color: str):
        return f"{self._time()} {color}[{level}]{Style.RESET_ALL}"

    def _print(self, *lines: str):
        with self._lock:
            for line in lines:
                print(line)

    def info(self, msg: str):
        if self.verbose >= 1:
            self._print(f"{self._fmt('INFO', Fore.CYAN)} {msg}")

    def warn(self, msg: str):
        if self.verbose >= 0:
            self._print(f"{self._fmt('WARNING', Fore.YELLOW)} {msg}")

    def ok(self, msg: str):
        self._print(f"{self._fmt('SUCCESS', Fore.GREEN)} {msg}")

    def fail(self, msg: str):
        self._print(f"{self._fmt('FAIL', Fore.RED)} {msg}")

    def debug(self, msg: str):
        if self.verbose >= 2:
            self._print(f"{self._fmt('DEBUG', Fore.MAGENTA)} {msg}")

    # ── engine events ───────────────────────────────────────────

    def _setting(self, key: str, value) -> str:
        if isinstance(value, bool):
            value = f"{Fore.GREEN if value else Fore.RED}{value}{Style.RESET_ALL}"
        elif isinstance(value, int):
            value = f"{Fore.LIGHTMAGENTA_EX}{value}{Style.RESET_ALL}"
        return f" > {Style.BRIGHT}{Fore.CYAN}{key}{Style.RESET_ALL} {value}"

    def run_start(self, target, settings):
        self.info(f"Probing {target.method} {target.url}")
        if self.verbose >= 1:
            self._print(
                self._setting("Method", target.method),
                self._setting("Params", ", ".join(target.params) or "-"),
                self._setting("Body", target.body_type.value),
                self._setting("Offset", settings.offset),
                self._setting("Offset Samples", settings.offset_samples),
                self._setting("Filtering", settings.filtering),
                self._setting("Workers", settings.workers),
            )

    def calibrated(self, baseline):
        self.info(f"Latency offset: {baseline.offset_ms} ms, "
                  f"{len(baseline.signatures)} error signatures active")

    def category_start(self, category, payload_count, chunk_count):
        name = category.value.capitalize()
        self.info(f"Starting {name} Blind SQL Injection testing "
                  f"({payload_count} payloads, {chunk_count} workers)...")

    def finding(self, finding):
        self._print(
            f"{self._fmt('CRITICAL', Fore.RED)} {Fore.YELLOW}"
            f"{_CATEGORY_TITLE[finding.category.value]}{Style.RESET_ALL}",
            f"   - {Style.BRIGHT}{Fore.CYAN}{finding.evidence_label}{Style.RESET_ALL} "
            f"{Fore.LIGHTMAGENTA_EX}{finding.evidence}{Style.RESET_ALL}",
            f"   - {Style.BRIGHT}{Fore.CYAN}Payload{Style.RESET_ALL} "
            f"{self.PAY}{finding.payload}{Style.RESET_ALL}",
        )

    def error(self, category, payload, exc):
        self.warn(f"[{category.value}] request failed for payload "
                  f"{self.PAY}{payload}{Style.RESET_ALL}: {exc}")

    def summary(self, report):
        if report.vulnerable:
            self.fail("One or more vulnerabilities have been found on the target.")
        else:
            self.ok("No vulnerability detected on specified target.")
