"""Deterministic local commit message heuristic.

Used when no remote provider is configured or every provider failed. The
message is derived from which files the diff adds, deletes or modifies and
from its added/removed line counts. It never raises.
"""

import posixpath
import re

from gims.git.diff import parse_unified_diff
from gims.git.models import FileDiff

LOCAL_PROVIDER_NAME = "local"

_TEST_PATH_RE = re.compile(
    r"(^|/)(tests?|__tests__|specs?)(/|$)|(^|/)test_[^/]*$|_test\.[^/]+$|\.(test|spec)\.[^/]+$",
    re.IGNORECASE,
)
_DOC_PATH_RE = re.compile(
    r"(^|/)docs?/|(^|/)(readme|changelog|contributing)[^/]*$|\.(md|rst|adoc)$",
    re.IGNORECASE,
)


def is_test_path(path: str) -> bool:
    """Check whether a path looks like a test file."""
    return bool(path) and bool(_TEST_PATH_RE.search(path))


def is_doc_path(path: str) -> bool:
    """Check whether a path looks like documentation."""
    return bool(path) and bool(_DOC_PATH_RE.search(path))


def _target(files: list[FileDiff]) -> str:
    """Name the single changed file, or count the files."""
    if len(files) == 1:
        # Bare +/- lines without a diff header carry no path
        return posixpath.basename(files[0].path) if files[0].path else "changes"
    return f"{len(files)} files"


def classify_change(diff: str) -> tuple[str, str]:
    """Classify a diff into a commit type and a lowercase subject.

    Args:
        diff: Unified diff text.

    Returns:
        (commit_type, subject), e.g. ("feat", "add app.js").
    """
    files = parse_unified_diff(diff)
    if not files:
        return "chore", "update project files"

    target = _target(files)
    additions = sum(f.additions for f in files)
    deletions = sum(f.deletions for f in files)
    paths = [f.path for f in files]

    if paths == [""] and additions and not deletions:
        return "feat", "add new code"

    if all(f.is_new for f in files):
        return "feat", f"add {target}"

    if all(f.is_deleted for f in files):
        return "chore", f"remove {target}"

    if all(is_test_path(p) for p in paths):
        return "test", "update tests"

    if all(is_doc_path(p) for p in paths):
        return "docs", "update documentation"

    if deletions > additions * 2:
        if len(files) == 1:
            if files[0].path:
                return "chore", f"remove unused code from {target}"
            return "chore", "remove unused code"
        return "chore", f"clean up {target}"

    if any(is_test_path(p) for p in paths):
        return "test", "update tests"

    if any(is_doc_path(p) for p in paths):
        return "docs", "update documentation"

    return "chore", f"update {target}"


def generate_local_message(diff: str, conventional: bool = False) -> str:
    """Generate a commit subject from the diff without any LLM.

    Args:
        diff: Unified diff text.
        conventional: Render as "type: subject" instead of a capitalized subject.

    Returns:
        A single-line commit subject.
    """
    commit_type, subject = classify_change(diff)
    if conventional:
        return f"{commit_type}: {subject}"
    return subject[0].upper() + subject[1:]
