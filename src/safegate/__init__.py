"""
SafeGate - File-safety gate for file-aggregation pipelines.

Runs a security scan over collected files and keeps only the files
that were not flagged.
"""

__version__ = "0.1.0"

from safegate.core.security import (
    FileSafetyValidator,
    RawFile,
    SafetyVerdict,
    SuspiciousFileResult,
    UntrustedFileFilter,
    filter_out_untrusted_files,
    validate_file_safety,
)

__all__ = [
    "__version__",
    "RawFile",
    "SuspiciousFileResult",
    "SafetyVerdict",
    "UntrustedFileFilter",
    "filter_out_untrusted_files",
    "FileSafetyValidator",
    "validate_file_safety",
]
