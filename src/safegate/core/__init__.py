"""
Core Layer - Configuration, file collection, and the file-safety gate.
"""

from safegate.core.config import (
    CollectorConfig,
    LoggingConfig,
    SafeGateConfig,
    SecurityConfig,
    load_config,
)
from safegate.core.file_collector import FileCollector, collect_raw_files
from safegate.core.security import (
    ConfigError,
    FileFilterInterface,
    FileSafetyValidator,
    ProgressCallback,
    RawFile,
    SafeGateError,
    SafetyVerdict,
    ScanRunnerInterface,
    SecurityCheckError,
    SuspiciousFileResult,
    UntrustedFileFilter,
    filter_out_untrusted_files,
    validate_file_safety,
)

__all__ = [
    # Config
    "SafeGateConfig",
    "SecurityConfig",
    "CollectorConfig",
    "LoggingConfig",
    "load_config",
    # File collection
    "FileCollector",
    "collect_raw_files",
    # Security gate
    "RawFile",
    "SuspiciousFileResult",
    "SafetyVerdict",
    "ScanRunnerInterface",
    "FileFilterInterface",
    "ProgressCallback",
    "UntrustedFileFilter",
    "filter_out_untrusted_files",
    "FileSafetyValidator",
    "validate_file_safety",
    # Errors
    "SafeGateError",
    "SecurityCheckError",
    "ConfigError",
]
