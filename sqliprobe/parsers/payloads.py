"""Line-oriented payload and signature catalogs.

One entry per line, UTF-8. Blank lines and lines starting with '#'
(after trimming) are skipped.
"""

from pathlib import Path
from typing import List

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

TIME_BASED_FILE = DATA_DIR / "time_based.txt"
ERROR_BASED_FILE = DATA_DIR / "error_based.txt"
SIGNATURES_FILE = DATA_DIR / "errors.txt"


def load_lines(text: str) -> List[str]:
    return [line for line in text.splitlines()
            if line.strip() and not line.strip().startswith("#")]


def load_file(path) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        return load_lines(f.read())


def time_based_payloads() -> List[str]:
    return load_file(TIME_BASED_FILE)


def error_based_payloads() -> List[str]:
    return load_file(ERROR_BASED_FILE)


def error_signatures() -> List[str]:
    return load_file(SIGNATURES_FILE)
