"""Data models for repository views.

Contains:
- DiffScope: Which changes a diff covers
- RenamedFile, WorkingTreeStatus: Working tree status listing
- FileStat, DiffSummary: Per-file insertion/deletion counts
- FileDiff: One file section parsed from unified diff text
- CommitInfo: One entry of the commit log
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class DiffScope(str, Enum):
    """Which changes a diff covers."""

    STAGED = "staged"
    UNSTAGED = "unstaged"
    ALL = "all"  # staged and unstaged, relative to HEAD


class RenamedFile(BaseModel):
    """A renamed path pair."""

    from_path: str
    to_path: str

    def render(self) -> str:
        return f"{self.from_path}→{self.to_path}"


class WorkingTreeStatus(BaseModel):
    """Working tree file lists, each in git's output order."""

    staged: list[str] = Field(default_factory=list)
    modified: list[str] = Field(default_factory=list)
    created: list[str] = Field(default_factory=list)
    deleted: list[str] = Field(default_factory=list)
    renamed: list[RenamedFile] = Field(default_factory=list)
    not_added: list[str] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.files


class FileStat(BaseModel):
    """Insertion/deletion counts for one file."""

    path: str
    insertions: int = 0
    deletions: int = 0
    binary: bool = False


class DiffSummary(BaseModel):
    """Per-file insertion/deletion counts for a change set."""

    files: list[FileStat] = Field(default_factory=list)

    @property
    def insertions(self) -> int:
        return sum(f.insertions for f in self.files)

    @property
    def deletions(self) -> int:
        return sum(f.deletions for f in self.files)

    @property
    def changed(self) -> int:
        return len(self.files)


class FileDiff(BaseModel):
    """One file section of a unified diff."""

    path: str
    old_path: Optional[str] = None
    is_new: bool = False
    is_deleted: bool = False
    is_rename: bool = False
    binary: bool = False
    additions: int = 0
    deletions: int = 0


class CommitInfo(BaseModel):
    """One entry of the commit log, addressed by its hash."""

    hash: str
    author: str
    date: str  # ISO 8601
    message: str
