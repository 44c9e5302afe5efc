"""
Security gate for SafeGate.

Partitions collected files into trusted and untrusted sets based on the
findings of a security scan.
"""

from .errors import ConfigError, SafeGateError, SecurityCheckError
from .file_filter import UntrustedFileFilter, filter_out_untrusted_files
from .interfaces import FileFilterInterface, ProgressCallback, ScanRunnerInterface
from .models import RawFile, SafetyVerdict, SuspiciousFileResult
from .validator import FileSafetyValidator, validate_file_safety

__all__ = [
    # Models
    "RawFile",
    "SuspiciousFileResult",
    "SafetyVerdict",
    # Interfaces
    "ScanRunnerInterface",
    "FileFilterInterface",
    "ProgressCallback",
    # Components
    "UntrustedFileFilter",
    "filter_out_untrusted_files",
    "FileSafetyValidator",
    "validate_file_safety",
    # Errors
    "SafeGateError",
    "SecurityCheckError",
    "ConfigError",
]
