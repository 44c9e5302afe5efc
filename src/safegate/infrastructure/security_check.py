"""
Security check runner for SafeGate.

Scans collected files for secrets with a SecretDetector and reports the
flagged files as SuspiciousFileResult objects.

Per-file detection is CPU-bound regex work, so batches are spread over a
ProcessPoolExecutor when more than one worker is configured; otherwise
files are scanned sequentially in the calling process.
"""

import asyncio
import logging
import re
from collections.abc import Sequence
from concurrent.futures import BrokenExecutor, ProcessPoolExecutor
from typing import Optional

from safegate.core.config import SecurityConfig
from safegate.core.security.errors import SecurityCheckError
from safegate.core.security.interfaces import ProgressCallback, ScanRunnerInterface
from safegate.core.security.models import RawFile, SuspiciousFileResult
from safegate.infrastructure.scan_worker import init_worker, scan_file_worker
from safegate.infrastructure.secret_rules import DEFAULT_RULES, SecretDetector, SecretRule

logger = logging.getLogger(__name__)


class SecurityCheckRunner(ScanRunnerInterface):
    """
    Default ScanRunnerInterface implementation.

    Honors SecurityConfig.enable_security_check: a disabled check returns
    an empty result without reading any file content.
    """

    def __init__(self, rules: Optional[Sequence[SecretRule]] = None):
        """
        Initialize the runner.

        Args:
            rules: Secret rules to apply (default: DEFAULT_RULES)
        """
        self._rules: tuple[SecretRule, ...] = tuple(rules) if rules is not None else DEFAULT_RULES

    async def run_security_check_if_enabled(
        self,
        files: Sequence[RawFile],
        config: SecurityConfig,
        progress_callback: ProgressCallback,
    ) -> list[SuspiciousFileResult]:
        if not config.enable_security_check:
            logger.debug("Security check disabled, skipping scan")
            return []

        _safe_report(progress_callback, "Running security check...")
        return await self.run_security_check(files, config, progress_callback)

    async def run_security_check(
        self,
        files: Sequence[RawFile],
        config: SecurityConfig,
        progress_callback: ProgressCallback,
    ) -> list[SuspiciousFileResult]:
        """
        Scan files unconditionally.

        Args:
            files: Files to scan
            config: Worker count and disabled rules
            progress_callback: Receives one message per scanned file

        Returns:
            SuspiciousFileResult for each flagged file, in input order

        Raises:
            SecurityCheckError: If a rule pattern is invalid or scanning a file fails
        """
        total_files = len(files)
        if total_files == 0:
            return []

        # Compiling here surfaces bad rule patterns before any worker starts
        try:
            detector = SecretDetector(self._rules, config.disabled_rules)
        except re.error as e:
            logger.error(f"Invalid secret rule pattern: {e}")
            raise SecurityCheckError(f"Invalid secret rule pattern: {e}") from e

        if config.max_workers > 1 and total_files > 1:
            messages_per_file: list[list[str]] = []
            try:
                await self._scan_parallel(files, config, progress_callback, messages_per_file)
            except (BrokenExecutor, OSError) as exc:
                logger.warning(
                    "ProcessPoolExecutor failed (%s). Falling back to sequential scanning "
                    "for the remaining %d files.",
                    exc,
                    total_files - len(messages_per_file),
                )
                messages_per_file.extend(
                    self._scan_sequential(
                        files, detector, progress_callback, start=len(messages_per_file)
                    )
                )
        else:
            messages_per_file = self._scan_sequential(files, detector, progress_callback)

        results = [
            SuspiciousFileResult(file_path=raw_file.path, messages=messages)
            for raw_file, messages in zip(files, messages_per_file)
            if messages
        ]

        logger.info(
            f"Security check complete: {len(results)} of {total_files} files flagged",
            extra={"total_files": total_files, "suspicious_files": len(results)},
        )
        return results

    async def _scan_parallel(
        self,
        files: Sequence[RawFile],
        config: SecurityConfig,
        progress_callback: ProgressCallback,
        messages_per_file: list[list[str]],
    ) -> None:
        """
        Scan files in worker processes, preserving input order.

        Messages are appended to messages_per_file as each file completes,
        so after a pool failure it holds the files already scanned.
        """
        total_files = len(files)
        loop = asyncio.get_running_loop()

        with ProcessPoolExecutor(
            max_workers=min(config.max_workers, total_files),
            initializer=init_worker,
            initargs=(self._rules, tuple(config.disabled_rules)),
        ) as executor:
            futures = [
                loop.run_in_executor(executor, scan_file_worker, raw_file.path, raw_file.content)
                for raw_file in files
            ]

            for index, (future, raw_file) in enumerate(zip(futures, files), start=1):
                try:
                    _, messages = await future
                except BrokenExecutor:
                    raise
                except Exception as e:
                    for pending in futures[index:]:
                        pending.cancel()
                    raise _scan_failure(raw_file.path, e) from e

                messages_per_file.append(messages)
                _report_file_progress(progress_callback, index, total_files, raw_file.path)

    def _scan_sequential(
        self,
        files: Sequence[RawFile],
        detector: SecretDetector,
        progress_callback: ProgressCallback,
        start: int = 0,
    ) -> list[list[str]]:
        """Scan files[start:] in the current process (single worker or fallback)."""
        total_files = len(files)
        messages_per_file: list[list[str]] = []

        for index in range(start + 1, total_files + 1):
            raw_file = files[index - 1]
            try:
                messages = detector.check(raw_file.content)
            except Exception as e:
                raise _scan_failure(raw_file.path, e) from e

            messages_per_file.append(messages)
            _report_file_progress(progress_callback, index, total_files, raw_file.path)

        return messages_per_file


def _scan_failure(file_path: str, error: Exception) -> SecurityCheckError:
    logger.error(f"Error during security check of {file_path}: {error}")
    return SecurityCheckError(f"Security check failed for {file_path}: {error}", file_path=file_path)


def _report_file_progress(
    progress_callback: ProgressCallback, index: int, total_files: int, file_path: str
) -> None:
    _safe_report(progress_callback, f"Running security check... ({index}/{total_files}) {file_path}")


def _safe_report(progress_callback: ProgressCallback, message: str) -> None:
    """Invoke the progress callback; a failing callback never aborts the scan."""
    logger.debug(message)
    try:
        progress_callback(message)
    except Exception as e:
        logger.warning(f"Progress callback raised {type(e).__name__}: {e}")
