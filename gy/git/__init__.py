"""Git Operations Package"""

from gy.git.repository import GitRepository, GitError, FileChange, StagedChanges

__all__ = [
    "GitRepository",
    "GitError",
    "FileChange",
    "StagedChanges",
]
