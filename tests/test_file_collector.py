"""
Tests for FileCollector: ignore patterns, .gitignore, size limit,
non-text skipping and path shape.
"""

import os

import pytest

from safegate.core.file_collector import FileCollector, collect_raw_files


def _write(root, rel_path, content="x\n"):
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


def test_collects_relative_posix_paths_in_sorted_order(tmp_path):
    _write(tmp_path, "b.txt")
    _write(tmp_path, "a.txt")
    _write(tmp_path, "src/pkg/mod.py", "import os\n")

    raw_files = collect_raw_files(tmp_path)

    assert [f.path for f in raw_files] == ["src/pkg/mod.py", "a.txt", "b.txt"]
    assert raw_files[0].content == "import os\n"


def test_ignore_patterns(tmp_path):
    _write(tmp_path, "keep.py")
    _write(tmp_path, "node_modules/lib/index.js")
    _write(tmp_path, "cache/__pycache__/mod.pyc")
    _write(tmp_path, "debug.log")

    raw_files = collect_raw_files(tmp_path, ignore_patterns=["node_modules", "__pycache__", "*.log"])

    assert [f.path for f in raw_files] == ["keep.py"]


def test_gitignore_is_honoured(tmp_path):
    _write(tmp_path, ".gitignore", "secrets/\n*.tmp\n")
    _write(tmp_path, "secrets/token.txt")
    _write(tmp_path, "scratch.tmp")
    _write(tmp_path, "main.py")

    paths = [f.path for f in collect_raw_files(tmp_path)]

    assert paths == [".gitignore", "main.py"]


def test_gitignore_can_be_disabled(tmp_path):
    _write(tmp_path, ".gitignore", "*.tmp\n")
    _write(tmp_path, "scratch.tmp")

    paths = [f.path for f in collect_raw_files(tmp_path, use_gitignore=False)]

    assert "scratch.tmp" in paths


def test_skips_large_files(tmp_path):
    _write(tmp_path, "small.txt", "abc")
    _write(tmp_path, "large.txt", "a" * 100)

    paths = [f.path for f in collect_raw_files(tmp_path, max_file_size_bytes=10)]

    assert paths == ["small.txt"]


def test_skips_binary_and_undecodable_files(tmp_path):
    _write(tmp_path, "text.txt", "hello")
    _write(tmp_path, "image.png", b"\x89PNG\r\n\x1a\n\xff\xfe\x00")
    _write(tmp_path, "nulls.bin", b"abc\x00def")

    paths = [f.path for f in collect_raw_files(tmp_path)]

    assert paths == ["text.txt"]


@pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
def test_skips_symlinks(tmp_path):
    target = _write(tmp_path, "real.txt")
    (tmp_path / "link.txt").symlink_to(target)

    paths = [f.path for f in collect_raw_files(tmp_path)]

    assert paths == ["real.txt"]


def test_missing_root(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileCollector().collect(tmp_path / "missing")


def test_root_is_file(tmp_path):
    file_path = _write(tmp_path, "file.txt")

    with pytest.raises(NotADirectoryError):
        FileCollector().collect(file_path)
