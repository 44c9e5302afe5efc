"""
Abstract interfaces for the file-safety gate collaborators.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from .models import RawFile, SuspiciousFileResult

if TYPE_CHECKING:
    from safegate.core.config import SecurityConfig

ProgressCallback = Callable[[str], None]


class ScanRunnerInterface(ABC):
    """
    Abstract interface for the security scan step.

    Implementations own the enable/disable policy: when scanning is
    disabled by the configuration they must resolve to an empty list
    without inspecting any content.
    """

    @abstractmethod
    async def run_security_check_if_enabled(
        self,
        files: Sequence[RawFile],
        config: "SecurityConfig",
        progress_callback: ProgressCallback,
    ) -> list[SuspiciousFileResult]:
        """
        Scan files for suspicious content.

        Args:
            files: Files to scan. Must not be mutated.
            config: Security configuration for this run
            progress_callback: Sink for human-readable progress messages

        Returns:
            One SuspiciousFileResult per flagged file
        """
        pass


class FileFilterInterface(ABC):
    """Abstract interface for partitioning files by scan findings."""

    @abstractmethod
    def filter(
        self,
        files: Sequence[RawFile],
        findings: Sequence[SuspiciousFileResult],
    ) -> list[RawFile]:
        """
        Return the files not implicated by any finding, in original order.
        """
        pass
