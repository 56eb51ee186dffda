"""Git repository facade for gims.

This package provides:
- exceptions: GitError, NotARepositoryError, NoStagedChangesError
- runner: _run_git_command, get_repo_root
- models: DiffScope, WorkingTreeStatus, DiffSummary, FileDiff, CommitInfo
- status: get_status, parse_porcelain_status
- diff: get_diff, get_diff_summary, parse_numstat, parse_unified_diff
- repository: ChangeSetSource, GitRepository, DiffTextChangeSet
"""

from gims.git.exceptions import (
    GitError,
    NoStagedChangesError,
    NotARepositoryError,
)

from gims.git.runner import (
    _run_git_command,
    get_repo_root,
)

from gims.git.models import (
    CommitInfo,
    DiffScope,
    DiffSummary,
    FileDiff,
    FileStat,
    RenamedFile,
    WorkingTreeStatus,
)

from gims.git.status import (
    get_status,
    parse_porcelain_status,
)

from gims.git.diff import (
    get_diff,
    get_diff_summary,
    parse_numstat,
    parse_unified_diff,
    summarize_file_diffs,
)

from gims.git.repository import (
    ChangeSetSource,
    DiffTextChangeSet,
    GitRepository,
)


__all__ = [
    # Exceptions
    "GitError",
    "NoStagedChangesError",
    "NotARepositoryError",
    # Runner
    "_run_git_command",
    "get_repo_root",
    # Models
    "CommitInfo",
    "DiffScope",
    "DiffSummary",
    "FileDiff",
    "FileStat",
    "RenamedFile",
    "WorkingTreeStatus",
    # Status
    "get_status",
    "parse_porcelain_status",
    # Diff
    "get_diff",
    "get_diff_summary",
    "parse_numstat",
    "parse_unified_diff",
    "summarize_file_diffs",
    # Repository
    "ChangeSetSource",
    "DiffTextChangeSet",
    "GitRepository",
]
