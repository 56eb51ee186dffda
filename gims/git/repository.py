"""Repository facade used by the commit message pipeline.

Contains:
- ChangeSetSource: The read-only views the pipeline needs
- GitRepository: Facade over the git executable for one repository
- DiffTextChangeSet: Views derived from raw unified diff text
"""

from pathlib import Path
from typing import Optional, Protocol

from gims.git.diff import (
    get_diff,
    get_diff_summary,
    parse_unified_diff,
    summarize_file_diffs,
)
from gims.git.exceptions import GitError
from gims.git.models import (
    CommitInfo,
    DiffScope,
    DiffSummary,
    FileDiff,
    RenamedFile,
    WorkingTreeStatus,
)
from gims.git.runner import _run_git_command
from gims.git.status import get_status


# Field and record separators for `git log --pretty=format:`
_LOG_FIELD_SEP = "\x1f"
_LOG_RECORD_SEP = "\x1e"


class ChangeSetSource(Protocol):
    """Read-only views of a pending change set."""

    def diff(self) -> str:
        ...

    def diff_summary(self) -> DiffSummary:
        ...

    def status(self) -> WorkingTreeStatus:
        ...


class GitRepository:
    """Facade over the git executable for one repository.

    Args:
        root: Repository directory (defaults to the current directory).
        scope: Which changes diff() and diff_summary() report by default.
    """

    def __init__(self, root: Optional[Path] = None, scope: DiffScope = DiffScope.STAGED):
        self.root = root
        self.scope = scope

    def status(self) -> WorkingTreeStatus:
        return get_status(cwd=self.root)

    def diff(self, scope: Optional[DiffScope] = None) -> str:
        return get_diff(scope or self.scope, cwd=self.root)

    def diff_summary(self, scope: Optional[DiffScope] = None) -> DiffSummary:
        return get_diff_summary(scope or self.scope, cwd=self.root)

    def stage_all(self) -> None:
        """Stage every change in the working tree."""
        _run_git_command(["add", "-A"], cwd=self.root)

    def commit(self, message: str, amend: bool = False) -> str:
        """Create a commit with the given message.

        Args:
            message: Full commit message (subject, blank line, body).
            amend: Amend the previous commit instead of creating a new one.

        Returns:
            The hash of the new commit.
        """
        args = ["commit", "-m", message]
        if amend:
            args.append("--amend")
        _run_git_command(args, cwd=self.root)
        return _run_git_command(["rev-parse", "HEAD"], cwd=self.root).strip()

    def log(self, max_count: int = 10) -> list[CommitInfo]:
        """Get the most recent commits, newest first.

        Returns an empty list for a repository without commits.
        """
        pretty = _LOG_FIELD_SEP.join(["%H", "%an", "%aI", "%s"]) + _LOG_RECORD_SEP
        try:
            output = _run_git_command(
                ["log", f"-n{max_count}", f"--pretty=format:{pretty}"], cwd=self.root
            )
        except GitError as e:
            if "does not have any commits" in str(e):
                return []
            raise

        commits = []
        for record in output.split(_LOG_RECORD_SEP):
            fields = record.strip("\n").split(_LOG_FIELD_SEP)
            if len(fields) != 4:
                continue
            commit_hash, author, date, subject = fields
            commits.append(CommitInfo(hash=commit_hash, author=author, date=date, message=subject))
        return commits


class DiffTextChangeSet:
    """Change set views computed from unified diff text alone.

    Lets the pipeline run on a diff that did not come from a live
    repository (piped input, tool integrations, tests).
    """

    def __init__(self, diff_text: str):
        self._diff = diff_text
        self._files: Optional[list[FileDiff]] = None

    @property
    def files(self) -> list[FileDiff]:
        if self._files is None:
            self._files = [f for f in parse_unified_diff(self._diff) if f.path]
        return self._files

    def diff(self) -> str:
        return self._diff

    def diff_summary(self) -> DiffSummary:
        return summarize_file_diffs(self.files)

    def status(self) -> WorkingTreeStatus:
        status = WorkingTreeStatus()
        for f in self.files:
            status.staged.append(f.path)
            status.files.append(f.path)
            if f.is_new:
                status.created.append(f.path)
            elif f.is_deleted:
                status.deleted.append(f.path)
            elif f.is_rename:
                status.renamed.append(RenamedFile(from_path=f.old_path or f.path, to_path=f.path))
            else:
                status.modified.append(f.path)
        return status
