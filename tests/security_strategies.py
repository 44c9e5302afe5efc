"""Shared hypothesis strategies for security gate tests."""

from hypothesis import strategies as st

from safegate.core.security import RawFile, SuspiciousFileResult

file_path_strategy = st.from_regex(r"[a-z][a-z0-9_]{0,8}(/[a-z][a-z0-9_]{0,8}){0,2}\.[a-z]{1,3}", fullmatch=True)

content_strategy = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyz0123456789 \n=_",
    max_size=60,
)

message_strategy = st.text(alphabet="abcdefghijklmnopqrstuvwxyz .", min_size=1, max_size=30)


@st.composite
def raw_files_strategy(draw, min_size: int = 0, max_size: int = 15):
    """Generate a batch of RawFile objects with unique paths."""
    paths = draw(st.lists(file_path_strategy, min_size=min_size, max_size=max_size, unique=True))
    return [RawFile(path=path, content=draw(content_strategy)) for path in paths]


@st.composite
def files_and_findings_strategy(draw):
    """
    Generate (files, findings) where findings reference a random subset
    of the file paths plus some paths not in the batch, with duplicates.
    """
    files = draw(raw_files_strategy())
    known_paths = [f.path for f in files]

    flagged = draw(st.lists(st.sampled_from(known_paths), max_size=len(known_paths))) if known_paths else []
    unknown = draw(
        st.lists(file_path_strategy.filter(lambda p: p not in known_paths), max_size=3)
    )

    findings = [
        SuspiciousFileResult(file_path=path, messages=draw(st.lists(message_strategy, min_size=1, max_size=3)))
        for path in flagged + unknown
    ]
    findings = draw(st.permutations(findings))
    return files, list(findings)
