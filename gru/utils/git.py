"""Managing a local Git repository through the git command."""

from __future__ import annotations

import shutil
import subprocess


class GitError(Exception):
    """Raised when git cannot be found or a git command fails."""

    def __init__(self, message: str, returncode: int | None = None, output: bytes = b"") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class GitRepo:
    """A Git repository at a local path with an upstream URL."""

    def __init__(self, path: str, upstream: str) -> None:
        git = shutil.which("git")
        if git is None:
            raise GitError("git executable not found in PATH")
        self.path = path
        self.upstream = upstream
        self._git = git

    def _run(self, *args: str) -> bytes:
        completed = subprocess.run(
            [self._git, *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
        if completed.returncode != 0:
            raise GitError(
                f"git {' '.join(args)} exited with status {completed.returncode}",
                returncode=completed.returncode,
                output=completed.stdout,
            )
        return completed.stdout

    def fetch(self, remote: str) -> bytes:
        """Fetch from the given remote and return the combined output."""
        return self._run("-C", self.path, "fetch", remote)

    def pull(self, remote: str, branch: str) -> bytes:
        """Check out ``branch`` and pull changes from ``remote`` into it."""
        self.checkout(branch)
        return self._run("-C", self.path, "pull", remote)

    def checkout(self, branch: str) -> bytes:
        """Check out a local branch."""
        return self._run("-C", self.path, "checkout", branch)

    def checkout_detached(self, branch: str) -> bytes:
        """Check out a branch in detached mode."""
        return self._run("-C", self.path, "checkout", "--detach", branch)

    def clone(self) -> bytes:
        """Create the local repository from the upstream URL."""
        return self._run("clone", self.upstream, self.path)

    def head(self) -> str:
        """Return the short commit id at HEAD."""
        out = self._run("-C", self.path, "rev-parse", "--short", "HEAD")
        return out.decode().strip("\n")

    def is_git_repo(self) -> bool:
        """Return True if the local path is a valid Git repository."""
        try:
            self._run("-C", self.path, "rev-parse")
        except GitError:
            return False
        return True