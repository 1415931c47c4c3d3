"""Git Repository - Read staged changes and run the commit."""

import subprocess
from dataclasses import dataclass, field


@dataclass
class FileChange:
    """Represents a single file's changes."""
    path: str
    additions: int
    deletions: int

    @property
    def total_changes(self) -> int:
        return self.additions + self.deletions


@dataclass
class StagedChanges:
    """Complete picture of what's staged for commit."""
    files: list[FileChange] = field(default_factory=list)
    diff: str = ""

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_additions(self) -> int:
        return sum(f.additions for f in self.files)

    @property
    def total_deletions(self) -> int:
        return sum(f.deletions for f in self.files)

    @property
    def is_empty(self) -> bool:
        return not self.diff.strip()


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class GitRepository:
    """Thin wrapper over the git CLI for the current working directory."""

    def __init__(self):
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError("Not inside a git repository")

    def get_staged_changes(self) -> StagedChanges:
        """Get staged changes only."""
        files = self._get_staged_files()
        diff = self._run_git('diff', '--staged')
        return StagedChanges(files=files, diff=diff)

    def get_unstaged_diff(self) -> str:
        """Working tree changes not yet added to the index."""
        return self._run_git('diff')

    def _get_staged_files(self) -> list[FileChange]:
        """Parse 'git diff --staged --numstat' output."""
        output = self._run_git('diff', '--staged', '--numstat')

        if not output.strip():
            return []

        files = []
        for line in output.strip().split('\n'):
            parts = line.split('\t')
            if len(parts) >= 3:
                # Binary files report '-' for both counts
                additions = int(parts[0]) if parts[0] != '-' else 0
                deletions = int(parts[1]) if parts[1] != '-' else 0
                path = parts[2]
                files.append(FileChange(path=path, additions=additions, deletions=deletions))

        return files

    def commit(self, message: str) -> None:
        """Run 'git commit -m'. Git's own output goes straight to the terminal."""
        try:
            result = subprocess.run(['git', 'commit', '-m', message])
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")
        if result.returncode != 0:
            raise GitError("git commit failed")
