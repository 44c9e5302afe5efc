"""
Security check worker functions for parallel processing.

Contains worker initialization and per-file scanning functions
that run in separate processes via ProcessPoolExecutor.
"""

from collections.abc import Sequence
from typing import Optional

from safegate.infrastructure.secret_rules import DEFAULT_RULES, SecretDetector, SecretRule

# Global detector for worker processes
_worker_detector: Optional[SecretDetector] = None


def init_worker(
    rules: Sequence[SecretRule] = DEFAULT_RULES,
    disabled_rules: Sequence[str] = (),
) -> None:
    """
    Initialize worker process with a detector.

    Runs once per worker process so rule patterns are compiled once
    rather than for every file.
    """
    global _worker_detector
    _worker_detector = SecretDetector(rules, disabled_rules)


def scan_file_worker(file_path: str, content: str) -> tuple[str, list[str]]:
    """
    Scan a single file in a worker process.

    Returns:
        Tuple of (file_path, messages); messages is empty for a clean file
    """
    if _worker_detector is None:
        init_worker()
    return file_path, _worker_detector.check(content)
