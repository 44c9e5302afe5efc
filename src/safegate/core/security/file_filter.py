"""
Set-difference filter that drops files flagged by a security scan.
"""

from collections.abc import Sequence

from .interfaces import FileFilterInterface
from .models import RawFile, SuspiciousFileResult


def filter_out_untrusted_files(
    files: Sequence[RawFile],
    findings: Sequence[SuspiciousFileResult],
) -> list[RawFile]:
    """
    Remove every file whose path appears in the findings.

    Findings that reference paths absent from ``files`` have no effect.
    Surviving files keep their relative order and identity.

    Args:
        files: Candidate files
        findings: Scan findings; a path may appear more than once

    Returns:
        New list with the untrusted files removed
    """
    flagged_paths = {finding.file_path for finding in findings}
    return [raw_file for raw_file in files if raw_file.path not in flagged_paths]


class UntrustedFileFilter(FileFilterInterface):
    """Default FileFilterInterface backed by filter_out_untrusted_files."""

    def filter(
        self,
        files: Sequence[RawFile],
        findings: Sequence[SuspiciousFileResult],
    ) -> list[RawFile]:
        return filter_out_untrusted_files(files, findings)
