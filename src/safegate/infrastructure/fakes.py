"""
Fake implementations for testing.

Provides in-memory implementations of the security gate interfaces
for use in unit and integration tests without running a real scan.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from safegate.core.security.file_filter import filter_out_untrusted_files
from safegate.core.security.interfaces import (
    FileFilterInterface,
    ProgressCallback,
    ScanRunnerInterface,
)
from safegate.core.security.models import RawFile, SuspiciousFileResult

if TYPE_CHECKING:
    from safegate.core.config import SecurityConfig


class StaticScanRunner(ScanRunnerInterface):
    """
    Scan runner that returns a fixed list of findings.

    Records every call so tests can assert on the exact arguments.
    Optionally emits progress messages before returning.
    """

    def __init__(
        self,
        findings: list[SuspiciousFileResult] | None = None,
        progress_messages: Sequence[str] = (),
    ):
        self.findings: list[SuspiciousFileResult] = findings if findings is not None else []
        self._progress_messages = list(progress_messages)
        self.calls: list[tuple[Sequence[RawFile], Any, ProgressCallback]] = []

    async def run_security_check_if_enabled(
        self,
        files: Sequence[RawFile],
        config: SecurityConfig,
        progress_callback: ProgressCallback,
    ) -> list[SuspiciousFileResult]:
        self.calls.append((files, config, progress_callback))
        for message in self._progress_messages:
            progress_callback(message)
        return self.findings


class FailingScanRunner(ScanRunnerInterface):
    """Scan runner that always raises the given exception."""

    def __init__(self, error: Exception):
        self.error = error
        self.call_count = 0

    async def run_security_check_if_enabled(
        self,
        files: Sequence[RawFile],
        config: SecurityConfig,
        progress_callback: ProgressCallback,
    ) -> list[SuspiciousFileResult]:
        self.call_count += 1
        raise self.error


class RecordingFileFilter(FileFilterInterface):
    """
    File filter that records its calls.

    Returns ``result`` when one is given, otherwise applies the real
    set-difference filter.
    """

    def __init__(self, result: list[RawFile] | None = None):
        self.result = result
        self.calls: list[tuple[Sequence[RawFile], Sequence[SuspiciousFileResult]]] = []

    def filter(
        self,
        files: Sequence[RawFile],
        findings: Sequence[SuspiciousFileResult],
    ) -> list[RawFile]:
        self.calls.append((files, findings))
        if self.result is not None:
            return self.result
        return filter_out_untrusted_files(files, findings)


class ProgressRecorder:
    """Progress callback that stores every message it receives."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)
