"""Running the git executable.

Contains:
- _run_git_command: Run git with arguments and return stdout
- get_repo_root: Locate the top level of the enclosing repository
"""

import os
import subprocess
from pathlib import Path
from typing import Optional

from gims.git.exceptions import GitError, NotARepositoryError

# Untranslated messages; callers match on git's English error text
_GIT_ENV = {"LC_ALL": "C", "GIT_TERMINAL_PROMPT": "0"}


def _run_git_command(args: list[str], cwd: Optional[Path] = None) -> str:
    """Run `git <args>` and return its stdout.

    Only trailing newlines are removed; porcelain status lines start with
    significant spaces.

    Args:
        args: Arguments after `git`.
        cwd: Working directory (current directory when omitted).

    Raises:
        GitError: On a non-zero exit status or when git is not installed.
    """
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
            env={**os.environ, **_GIT_ENV},
        )
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise GitError(f"Git command failed: git {' '.join(args)}\n{stderr}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")

    return result.stdout.rstrip("\n")


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the top-level directory of the repository containing cwd.

    Raises:
        NotARepositoryError: If cwd is not inside a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=cwd)
    except GitError:
        raise NotARepositoryError(
            "Not in a git repository. Please run this command from within a git repo."
        )
    return Path(root.strip())
