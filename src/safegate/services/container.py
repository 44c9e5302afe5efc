"""
Centralized services container module for SafeGate.

Wires the default collaborators of the file-safety gate from
configuration so entry points do not construct them by hand.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from safegate.core.config import SafeGateConfig, load_config
from safegate.core.file_collector import FileCollector
from safegate.core.security import (
    FileFilterInterface,
    FileSafetyValidator,
    ScanRunnerInterface,
    UntrustedFileFilter,
)
from safegate.infrastructure import SecurityCheckRunner


@dataclass
class ServicesContainer:
    """
    Container holding all shared service instances.

    Attributes:
        config: Application configuration
        file_collector: Reads files from disk into RawFile objects
        scan_runner: Security scan step
        file_filter: Untrusted-file filter step
        validator: Orchestrator built from scan_runner and file_filter
    """

    config: SafeGateConfig
    file_collector: FileCollector
    scan_runner: ScanRunnerInterface
    file_filter: FileFilterInterface
    validator: FileSafetyValidator


def create_services(
    config_path: Optional[Path] = None,
    config: Optional[SafeGateConfig] = None,
) -> ServicesContainer:
    """
    Create and initialize all services.

    Args:
        config_path: Optional path to configuration file. Ignored when
                    config is given.
        config: Optional ready-made configuration

    Returns:
        ServicesContainer with all initialized services.

    Raises:
        FileNotFoundError: If config_path does not exist
        ConfigError: If the configuration file is invalid
    """
    if config is None:
        config = load_config(config_path)

    file_collector = FileCollector(
        ignore_patterns=config.collector.ignore_patterns,
        max_file_size_bytes=config.collector.max_file_size_bytes,
        use_gitignore=config.collector.use_gitignore,
    )
    scan_runner = SecurityCheckRunner()
    file_filter = UntrustedFileFilter()

    return ServicesContainer(
        config=config,
        file_collector=file_collector,
        scan_runner=scan_runner,
        file_filter=file_filter,
        validator=FileSafetyValidator(scan_runner=scan_runner, file_filter=file_filter),
    )
