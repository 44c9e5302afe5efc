"""
Data models for the file-safety gate.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RawFile:
    """
    In-memory representation of a collected source file.

    Attributes:
        path: Identifier of the file within its batch (opaque to the gate)
        content: Full file text
    """

    path: str
    content: str


@dataclass
class SuspiciousFileResult:
    """
    A scanner finding for a single file.

    Attributes:
        file_path: Path of the flagged file, matching a RawFile.path
        messages: Human-readable reasons the file was flagged
    """

    file_path: str
    messages: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"filePath": self.file_path, "messages": list(self.messages)}


@dataclass
class SafetyVerdict:
    """
    Consolidated outcome of a file-safety validation.

    Attributes:
        safe_raw_files: Files cleared for output, in original input order
        safe_file_paths: Paths of safe_raw_files, same order
        suspicious_files_results: Findings exactly as returned by the scan step
    """

    safe_raw_files: list[RawFile]
    safe_file_paths: list[str]
    suspicious_files_results: list[SuspiciousFileResult]

    @property
    def excluded_file_paths(self) -> list[str]:
        """Flagged paths, deduplicated, in the order the scan reported them."""
        seen: dict[str, None] = {}
        for result in self.suspicious_files_results:
            seen.setdefault(result.file_path, None)
        return list(seen)

    def to_dict(self) -> dict[str, Any]:
        return {
            "safeFilePaths": list(self.safe_file_paths),
            "suspiciousFilesResults": [r.to_dict() for r in self.suspicious_files_results],
        }
