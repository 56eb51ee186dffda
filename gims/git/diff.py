"""Git diff utilities.

Contains:
- get_diff: Get unified diff text for a scope
- get_diff_summary: Get per-file insertion/deletion counts for a scope
- parse_numstat: Parse `git diff --numstat` output
- parse_unified_diff: Split unified diff text into per-file records
- summarize_file_diffs: Build a DiffSummary from parsed file records
"""

import re
from pathlib import Path
from typing import Optional

from gims.git.exceptions import GitError
from gims.git.models import DiffScope, DiffSummary, FileDiff, FileStat
from gims.git.runner import _run_git_command


_DIFF_HEADER_RE = re.compile(r"^diff --git a/(.+?) b/(.+)$")


def _scope_args(scope: DiffScope) -> list[str]:
    if scope == DiffScope.STAGED:
        return ["--cached"]
    if scope == DiffScope.ALL:
        return ["HEAD"]
    return []


def get_diff(scope: DiffScope = DiffScope.STAGED, cwd: Optional[Path] = None) -> str:
    """Get the unified diff for the given scope.

    Args:
        scope: Staged changes, unstaged changes, or everything relative to HEAD.
        cwd: Directory to run git in.

    Returns:
        The diff text (empty string if there are no changes).
    """
    try:
        return _run_git_command(["diff", "--no-ext-diff"] + _scope_args(scope), cwd=cwd)
    except GitError:
        if scope != DiffScope.ALL:
            raise
        # No HEAD yet (fresh repository): everything is in the index or worktree
        staged = _run_git_command(["diff", "--no-ext-diff", "--cached"], cwd=cwd)
        unstaged = _run_git_command(["diff", "--no-ext-diff"], cwd=cwd)
        return "\n".join(part for part in (staged, unstaged) if part)


def parse_numstat(output: str) -> DiffSummary:
    """Parse `git diff --numstat` output.

    Binary files are reported by git as "-\t-\tpath" and get zero counts.

    Args:
        output: The numstat output.

    Returns:
        DiffSummary with one FileStat per line.
    """
    files = []
    for line in output.split("\n"):
        parts = line.split("\t", 2)
        if len(parts) != 3:
            continue
        insertions, deletions, path = parts
        binary = insertions == "-" and deletions == "-"
        files.append(
            FileStat(
                path=path,
                insertions=0 if binary else int(insertions),
                deletions=0 if binary else int(deletions),
                binary=binary,
            )
        )
    return DiffSummary(files=files)


def get_diff_summary(scope: DiffScope = DiffScope.STAGED, cwd: Optional[Path] = None) -> DiffSummary:
    """Get per-file insertion/deletion counts for the given scope."""
    output = _run_git_command(["diff", "--no-ext-diff", "--numstat"] + _scope_args(scope), cwd=cwd)
    return parse_numstat(output)


def parse_unified_diff(diff: str) -> list[FileDiff]:
    """Split unified diff text into per-file records with line counts.

    Text without any `diff --git` header is treated as a single unnamed file,
    counting its +/- lines.

    Args:
        diff: Unified diff text.

    Returns:
        One FileDiff per file section, in diff order.
    """
    files: list[FileDiff] = []
    current: Optional[FileDiff] = None
    in_hunk = False
    headerless = "diff --git" not in diff

    for line in diff.split("\n"):
        header = _DIFF_HEADER_RE.match(line)
        if header:
            old_path, new_path = header.group(1), header.group(2)
            current = FileDiff(path=new_path, old_path=old_path)
            files.append(current)
            in_hunk = False
            continue

        if current is None:
            if headerless and line.strip():
                current = FileDiff(path="")
                files.append(current)
            else:
                continue

        if line.startswith("@@"):
            in_hunk = True
            continue

        if not in_hunk:
            if line.startswith("new file mode"):
                current.is_new = True
            elif line.startswith("deleted file mode"):
                current.is_deleted = True
            elif line.startswith("rename to "):
                current.is_rename = True
                current.path = line[len("rename to "):]
            elif line.startswith("rename from "):
                current.old_path = line[len("rename from "):]
            elif line.startswith("Binary files") or line.startswith("GIT binary patch"):
                current.binary = True
            elif current.path == "":
                # Headerless text: count lines outside hunks too
                if line.startswith("+") and not line.startswith("+++"):
                    current.additions += 1
                elif line.startswith("-") and not line.startswith("---"):
                    current.deletions += 1
            continue

        if line.startswith("+"):
            current.additions += 1
        elif line.startswith("-"):
            current.deletions += 1

    return files


def summarize_file_diffs(files: list[FileDiff]) -> DiffSummary:
    """Build a DiffSummary from parsed file records."""
    return DiffSummary(
        files=[
            FileStat(
                path=f.path,
                insertions=f.additions,
                deletions=f.deletions,
                binary=f.binary,
            )
            for f in files
            if f.path
        ]
    )
