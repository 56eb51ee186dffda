"""Git status utilities.

Contains:
- parse_porcelain_status: Parse `git status --porcelain=v1` output
- get_status: Get the working tree status of a repository
"""

from pathlib import Path
from typing import Optional

from gims.git.models import RenamedFile, WorkingTreeStatus
from gims.git.runner import _run_git_command


def _unquote(path: str) -> str:
    """Strip the quotes git adds around paths with special characters."""
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        return path[1:-1].replace('\\"', '"').replace("\\\\", "\\")
    return path


def parse_porcelain_status(output: str) -> WorkingTreeStatus:
    """Parse porcelain v1 status output into categorized path lists.

    The porcelain format uses two columns:
    - First column (X): staged status (index)
    - Second column (Y): worktree status

    Args:
        output: Output from git status --porcelain=v1 (with or without -b).

    Returns:
        WorkingTreeStatus with paths in git's output order.
    """
    status = WorkingTreeStatus()

    for line in output.split("\n"):
        # Skip blank lines and the branch header
        if not line or line.startswith("##") or len(line) < 4:
            continue

        index_status, worktree_status = line[0], line[1]
        path = line[3:]

        if index_status == "?" and worktree_status == "?":
            path = _unquote(path)
            status.not_added.append(path)
            status.files.append(path)
            continue

        if index_status in ("R", "C") and " -> " in path:
            old_path, new_path = path.split(" -> ", 1)
            old_path, new_path = _unquote(old_path), _unquote(new_path)
            if index_status == "R":
                status.renamed.append(RenamedFile(from_path=old_path, to_path=new_path))
            else:
                status.created.append(new_path)
            path = new_path
        else:
            path = _unquote(path)

        if index_status not in (" ", "?"):
            status.staged.append(path)
        if index_status == "A":
            status.created.append(path)
        if "M" in (index_status, worktree_status):
            status.modified.append(path)
        if "D" in (index_status, worktree_status):
            status.deleted.append(path)

        status.files.append(path)

    return status


def get_status(cwd: Optional[Path] = None) -> WorkingTreeStatus:
    """Get the working tree status.

    Returns:
        The parsed git status.
    """
    return parse_porcelain_status(_run_git_command(["status", "--porcelain=v1"], cwd=cwd))
