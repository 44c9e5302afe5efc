"""
File collection for SafeGate.

Reads a directory tree into RawFile objects ready for safety validation.
"""

import logging
from pathlib import Path
from typing import Iterator

import pathspec

from safegate.core.security.models import RawFile

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024


class FileCollector:
    """
    Collects text files below a root directory.

    Provides:
    - Gitignore-style pattern matching via pathspec
    - Optional loading of the root .gitignore
    - Size limit and UTF-8 decoding checks
    - Deterministic, sorted traversal order

    Symlinks are never followed.
    """

    def __init__(
        self,
        ignore_patterns: list[str] | None = None,
        max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
        use_gitignore: bool = True,
    ):
        """
        Initialize the FileCollector.

        Args:
            ignore_patterns: Gitignore-style patterns to exclude
            max_file_size_bytes: Files larger than this are skipped
            use_gitignore: Whether to honour the root .gitignore file
        """
        self._ignore_patterns = list(ignore_patterns or [])
        self._max_file_size_bytes = max_file_size_bytes
        self._use_gitignore = use_gitignore

    def _build_spec(self, root_path: Path) -> pathspec.GitIgnoreSpec:
        lines = list(self._ignore_patterns)

        gitignore_path = root_path / ".gitignore"
        if self._use_gitignore and gitignore_path.is_file():
            try:
                lines.extend(gitignore_path.read_text(encoding="utf-8").splitlines())
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Failed to read {gitignore_path}: {e}")

        return pathspec.GitIgnoreSpec.from_lines(lines)

    def collect(self, root_path: Path | str) -> list[RawFile]:
        """
        Collect every readable text file below root_path.

        Args:
            root_path: Directory to collect from

        Returns:
            RawFile objects with POSIX paths relative to root_path

        Raises:
            FileNotFoundError: If root_path does not exist
            NotADirectoryError: If root_path is not a directory
        """
        root_path = Path(root_path).resolve()

        if not root_path.exists():
            raise FileNotFoundError(f"Root path does not exist: {root_path}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {root_path}")

        spec = self._build_spec(root_path)
        raw_files = list(self._walk(root_path, root_path, spec))
        logger.debug(f"Collected {len(raw_files)} files from {root_path}")
        return raw_files

    def _walk(
        self, root_path: Path, current_path: Path, spec: pathspec.GitIgnoreSpec
    ) -> Iterator[RawFile]:
        try:
            entries = sorted(current_path.iterdir(), key=lambda p: (not p.is_dir(), p.name))
        except OSError as e:
            logger.warning(f"Error accessing directory: {current_path} - {e}")
            return

        for entry in entries:
            if entry.is_symlink():
                logger.debug(f"Skipping symlink: {entry}")
                continue

            relative = entry.relative_to(root_path).as_posix()

            if entry.is_dir():
                if spec.match_file(relative + "/"):
                    logger.debug(f"Ignoring directory: {relative}")
                    continue
                yield from self._walk(root_path, entry, spec)
            elif entry.is_file():
                if spec.match_file(relative):
                    logger.debug(f"Ignoring file: {relative}")
                    continue
                raw_file = self._read_file(entry, relative)
                if raw_file is not None:
                    yield raw_file

    def _read_file(self, file_path: Path, relative: str) -> RawFile | None:
        try:
            size_bytes = file_path.stat().st_size
            if size_bytes > self._max_file_size_bytes:
                logger.warning(f"Skipping large file ({size_bytes} bytes): {relative}")
                return None

            content = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.debug(f"Skipping non-UTF-8 file: {relative}")
            return None
        except OSError as e:
            logger.warning(f"Error reading file: {relative} - {e}")
            return None

        if "\x00" in content:
            logger.debug(f"Skipping binary file: {relative}")
            return None

        return RawFile(path=relative, content=content)


def collect_raw_files(
    root_path: Path | str,
    ignore_patterns: list[str] | None = None,
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
    use_gitignore: bool = True,
) -> list[RawFile]:
    """Collect RawFile objects below root_path with a one-off FileCollector."""
    collector = FileCollector(
        ignore_patterns=ignore_patterns,
        max_file_size_bytes=max_file_size_bytes,
        use_gitignore=use_gitignore,
    )
    return collector.collect(root_path)
