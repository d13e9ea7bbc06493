"""Compute the lifecycle status of chart versions across branches and save it."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from charts_build.config.settings import HELM_INDEX_FILE, LOGS_DIR, STATE_FILE, VERSION_RULES_FILE, settings
from charts_build.core.git_repo import BranchGuard, GitRepo
from charts_build.core.helm_index import read_index
from charts_build.core.lifecycle import (
    compare_released_and_development,
    separate_release_from_forward_port,
    split_by_lifecycle,
)
from charts_build.core.lifecycle_logs import LifecycleLogs
from charts_build.core.state import save_state
from charts_build.core.version_rules import VersionRules
from charts_build.errors import GitOperationError, PolicyEvaluationError
from charts_build.models import LogLevel
from charts_build.models.asset import AssetsMap
from charts_build.models.lifecycle import Status

logger = logging.getLogger(__name__)

CURRENT_BRANCH_LOG = "current-branch.log"
PROD_X_DEV_LOG = "production-x-development.log"
RELEASED_X_FORWARD_PORTED_LOG = "released-x-forward-ported.log"

IndexReader = Callable[[Path], AssetsMap]
RepoOpener = Callable[[Path], GitRepo]


class StatusReporter:
    """Drives the lifecycle classification over the production and development branches."""

    def __init__(
        self,
        repo_dir: Path | None = None,
        rules: VersionRules | None = None,
        open_repo: RepoOpener = GitRepo.open,
        read_index: IndexReader = read_index,
        logs_dir: Path | None = None,
    ):
        self.repo_dir = repo_dir or settings.repo_root
        self.rules = rules or VersionRules.load(self.repo_dir / VERSION_RULES_FILE)
        self.open_repo = open_repo
        self.read_index = read_index
        self.logs_dir = logs_dir or self.repo_dir / LOGS_DIR

    @property
    def index_path(self) -> Path:
        return self.repo_dir / HELM_INDEX_FILE

    def get_status(self) -> Status:
        """Classify the current branch, both default branches, then release vs forward-port.

        A PolicyEvaluationError carries the partially filled Status.
        """
        status = Status()
        repo = self.open_repo(self.repo_dir)
        current_branch = repo.branch
        logger.info("computing lifecycle status from branch %s", current_branch)

        current_assets = self.read_index(self.index_path)
        inside, outside = split_by_lifecycle(current_assets, self.rules)
        status.in_lifecycle_current_branch = inside
        status.out_lifecycle_current_branch = outside

        self._compare_prod_and_dev(repo, current_branch, status)

        try:
            separate_release_from_forward_port(
                status.not_released_in_lifecycle,
                self.rules,
                to_be_released=status.to_be_released,
                to_be_forward_ported=status.to_be_forward_ported,
            )
        except PolicyEvaluationError as e:
            e.status = status
            raise
        return status

    def _compare_prod_and_dev(self, repo: GitRepo, current_branch: str, status: Status) -> None:
        guard = BranchGuard(repo).acquire()
        try:
            released, development = self._read_prod_and_dev(repo, current_branch)
            status.apply_cross_branch(
                compare_released_and_development(released, development, self.rules)
            )
        except GitOperationError:
            # the failed step may have left the tree in any state; do not touch it
            logger.error("git operation failed, working tree left on its current branch")
            raise
        except BaseException:
            guard.release()
            raise
        guard.release()

    def _read_prod_and_dev(self, repo: GitRepo, current_branch: str) -> tuple[AssetsMap, AssetsMap]:
        prod, dev = self.rules.prod_branch, self.rules.dev_branch
        if current_branch == prod:
            repo.fetch_and_pull_branch(prod)
        else:
            repo.fetch_and_checkout_branch(prod)
        released = self.read_index(self.index_path)

        repo.fetch_and_checkout_branch(dev)
        development = self.read_index(self.index_path)
        return released, development

    def check_and_save(self, chart: str = "") -> Status:
        """Compute the status, write the three report files and the state snapshot."""
        status = self.get_status()
        if chart:
            status = status.filter_chart(chart)

        rules = self.rules
        with LifecycleLogs.create(self.logs_dir, CURRENT_BRANCH_LOG, chart) as cb:
            cb.write_head(rules, "Assets versions vs the lifecycle rules in the current branch")
            cb.write("Versions INSIDE the lifecycle in the current branch", LogLevel.INFO)
            cb.write_versions(status.in_lifecycle_current_branch, LogLevel.INFO)
            cb.write("", LogLevel.END)
            cb.write("Versions OUTSIDE the lifecycle in the current branch", LogLevel.WARN)
            cb.write_versions(status.out_lifecycle_current_branch, LogLevel.WARN)
            cb.write("", LogLevel.END)

        with LifecycleLogs.create(self.logs_dir, PROD_X_DEV_LOG, chart) as pd:
            pd.write_head(rules, "Released assets vs development assets with lifecycle rules")
            sections = (
                ("Assets RELEASED and inside the lifecycle", "production", rules.prod_branch,
                 status.released_in_lifecycle, LogLevel.INFO),
                ("Assets NOT released and out of the lifecycle", "development", rules.dev_branch,
                 status.not_released_out_lifecycle, LogLevel.INFO),
                ("Assets NOT released and inside the lifecycle", "development", rules.dev_branch,
                 status.not_released_in_lifecycle, LogLevel.WARN),
                ("Assets released and out of the lifecycle", "production", rules.prod_branch,
                 status.released_out_lifecycle, LogLevel.ERROR),
            )
            for title, kind, branch, assets, level in sections:
                pd.write(title, level)
                pd.write(f"At the {kind} branch: {branch}", level)
                pd.write_versions(assets, level)
                pd.write("", LogLevel.END)

        with LifecycleLogs.create(self.logs_dir, RELEASED_X_FORWARD_PORTED_LOG, chart) as rf:
            rf.write_head(rules, "Assets to be released vs forward ported")
            rf.write("Assets to be RELEASED", LogLevel.INFO)
            rf.write_versions(status.to_be_released, LogLevel.INFO)
            rf.write("", LogLevel.END)
            rf.write("Assets to be FORWARD-PORTED", LogLevel.INFO)
            rf.write_versions(status.to_be_forward_ported, LogLevel.INFO)
            rf.write("", LogLevel.END)

        save_state(status, self.logs_dir / STATE_FILE)
        return status
