"""git CLI wrapper used to switch between release branches."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from charts_build.config.settings import settings
from charts_build.errors import GitOperationError, ToolUnavailableError
from charts_build.utils.process import run_command

logger = logging.getLogger(__name__)


class GitRepo:
    """A git working tree driven through the ``git`` binary."""

    def __init__(self, path: Path, remote: str | None = None):
        self.path = path
        self.remote = remote or settings.git_remote

    @classmethod
    def open(cls, path: Path | str, remote: str | None = None) -> GitRepo:
        if shutil.which("git") is None:
            raise ToolUnavailableError("cannot find git on PATH")
        repo = cls(Path(path), remote=remote)
        repo._git("rev-parse", "--show-toplevel")
        return repo

    def _git(self, *args: str) -> str:
        result = run_command(["git", *args], cwd=self.path)
        if result.code != 0:
            logger.error("git %s failed:\n%s", " ".join(args), result.combined_output)
            raise GitOperationError(
                f"git {' '.join(args)} failed in {self.path}",
                returncode=result.code,
                output=result.combined_output,
            )
        return result.stdout.strip()

    @property
    def branch(self) -> str:
        """Current branch name, or ``HEAD`` when detached."""
        return self._git("rev-parse", "--abbrev-ref", "HEAD")

    @property
    def head_commit(self) -> str:
        return self._git("rev-parse", "HEAD")

    def has_local_branch(self, name: str) -> bool:
        result = run_command(["git", "show-ref", "--verify", "--quiet", f"refs/heads/{name}"], cwd=self.path)
        return result.code == 0

    def checkout_branch(self, name: str) -> None:
        logger.debug("checking out %s", name)
        self._git("checkout", name)

    def fetch_branch(self, name: str) -> None:
        self._git("fetch", self.remote, name)

    def fetch_and_pull_branch(self, name: str) -> None:
        logger.info("fetching and pulling %s/%s", self.remote, name)
        self.fetch_branch(name)
        self._git("pull", "--ff-only", self.remote, name)

    def checkout_detached(self, ref: str) -> None:
        logger.debug("checking out %s detached", ref)
        self._git("checkout", "--detach", ref)

    def fetch_and_checkout_branch(self, name: str) -> None:
        """Switch to the fetched tip of ``name`` without rewriting local commits.

        An existing local branch is fast-forwarded, and a branch that has
        diverged from the remote is an error. Without a local branch the remote
        ref is checked out detached.
        """
        logger.info("fetching and checking out %s/%s", self.remote, name)
        self.fetch_branch(name)
        remote_ref = f"{self.remote}/{name}"
        if self.has_local_branch(name):
            self._git("checkout", name)
            self._git("merge", "--ff-only", remote_ref)
        else:
            self.checkout_detached(remote_ref)


class BranchGuard:
    """Remembers the checked-out branch so it can be restored later.

    ``acquire`` records the current branch and ``release`` checks it out
    again. Callers decide on which paths ``release`` runs.
    """

    def __init__(self, repo: GitRepo):
        self.repo = repo
        self.original_branch: str | None = None
        # set instead of the branch when HEAD was detached
        self.original_commit: str | None = None

    @property
    def acquired(self) -> bool:
        return self.original_branch is not None or self.original_commit is not None

    def acquire(self) -> BranchGuard:
        if self.acquired:
            raise RuntimeError("branch guard already acquired")
        branch = self.repo.branch
        if branch == "HEAD":
            self.original_commit = self.repo.head_commit
            logger.debug("recorded detached HEAD at %s", self.original_commit)
        else:
            self.original_branch = branch
            logger.debug("recorded original branch %s", branch)
        return self

    def release(self) -> None:
        if not self.acquired:
            raise RuntimeError("branch guard was never acquired")
        branch, commit = self.original_branch, self.original_commit
        self.original_branch = self.original_commit = None
        if commit is not None:
            logger.debug("restoring detached HEAD at %s", commit)
            self.repo.checkout_detached(commit)
        else:
            logger.debug("restoring original branch %s", branch)
            self.repo.checkout_branch(branch)
