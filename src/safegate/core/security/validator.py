"""
File-safety validation: run the security scan, then keep only trusted files.
"""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

from .file_filter import UntrustedFileFilter
from .interfaces import FileFilterInterface, ProgressCallback, ScanRunnerInterface
from .models import RawFile, SafetyVerdict

if TYPE_CHECKING:
    from safegate.core.config import SecurityConfig

logger = logging.getLogger(__name__)


class FileSafetyValidator:
    """
    Orchestrates the security scan and the untrusted-file filter.

    The scan always sees the full, unfiltered batch. Whatever the scan
    returns is handed to the filter untouched and echoed back in the
    verdict. Scan failures are not caught here.
    """

    def __init__(
        self,
        scan_runner: Optional[ScanRunnerInterface] = None,
        file_filter: Optional[FileFilterInterface] = None,
    ):
        """
        Initialize the validator.

        Args:
            scan_runner: Security scan step (default: SecurityCheckRunner)
            file_filter: Filter step (default: UntrustedFileFilter)
        """
        if scan_runner is None:
            # Deferred: the infrastructure layer imports core.security
            from safegate.infrastructure.security_check import SecurityCheckRunner

            scan_runner = SecurityCheckRunner()
        self._scan_runner = scan_runner
        if file_filter is None:
            file_filter = UntrustedFileFilter()
        self._file_filter = file_filter

    async def validate(
        self,
        files: Sequence[RawFile],
        progress_callback: ProgressCallback,
        config: "SecurityConfig",
    ) -> SafetyVerdict:
        """
        Validate a batch of files.

        Args:
            files: Collected files, unfiltered
            progress_callback: Forwarded to the scan step as-is
            config: Security configuration forwarded to the scan step

        Returns:
            SafetyVerdict with the safe files, their paths and the raw findings
        """
        suspicious_files_results = await self._scan_runner.run_security_check_if_enabled(
            files, config, progress_callback
        )
        safe_raw_files = self._file_filter.filter(files, suspicious_files_results)
        safe_file_paths = [raw_file.path for raw_file in safe_raw_files]

        logger.info(
            f"Safety validation complete: {len(safe_raw_files)} safe, "
            f"{len(suspicious_files_results)} suspicious",
            extra={
                "total_files": len(files),
                "safe_files": len(safe_raw_files),
                "suspicious_files": len(suspicious_files_results),
            },
        )

        return SafetyVerdict(
            safe_raw_files=safe_raw_files,
            safe_file_paths=safe_file_paths,
            suspicious_files_results=suspicious_files_results,
        )


async def validate_file_safety(
    files: Sequence[RawFile],
    progress_callback: ProgressCallback,
    config: "SecurityConfig",
    scan_runner: Optional[ScanRunnerInterface] = None,
    file_filter: Optional[FileFilterInterface] = None,
) -> SafetyVerdict:
    """Validate files with a one-off FileSafetyValidator."""
    validator = FileSafetyValidator(scan_runner=scan_runner, file_filter=file_filter)
    return await validator.validate(files, progress_callback, config)
