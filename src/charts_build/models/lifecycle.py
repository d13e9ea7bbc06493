"""Lifecycle policy protocol and status buckets."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Protocol

from charts_build.models.asset import AssetsMap, versions_of


class LifecyclePolicy(Protocol):
    def in_lifecycle(self, version: str) -> bool: ...

    def should_release(self, version: str) -> bool: ...

    def is_release_candidate(self, version: str) -> bool: ...


@dataclass
class CrossBranchBuckets:
    released_in_lifecycle: AssetsMap = field(default_factory=dict)
    not_released_out_lifecycle: AssetsMap = field(default_factory=dict)
    not_released_in_lifecycle: AssetsMap = field(default_factory=dict)
    released_out_lifecycle: AssetsMap = field(default_factory=dict)


@dataclass
class Status:
    """Result of one lifecycle status run."""

    in_lifecycle_current_branch: AssetsMap = field(default_factory=dict)
    out_lifecycle_current_branch: AssetsMap = field(default_factory=dict)
    released_in_lifecycle: AssetsMap = field(default_factory=dict)  # OK if not empty
    not_released_out_lifecycle: AssetsMap = field(default_factory=dict)  # OK if not empty
    not_released_in_lifecycle: AssetsMap = field(default_factory=dict)  # WARN if not empty
    released_out_lifecycle: AssetsMap = field(default_factory=dict)  # ERROR if not empty
    to_be_released: AssetsMap = field(default_factory=dict)
    to_be_forward_ported: AssetsMap = field(default_factory=dict)

    @classmethod
    def bucket_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def apply_cross_branch(self, buckets: CrossBranchBuckets) -> None:
        self.released_in_lifecycle = buckets.released_in_lifecycle
        self.not_released_out_lifecycle = buckets.not_released_out_lifecycle
        self.not_released_in_lifecycle = buckets.not_released_in_lifecycle
        self.released_out_lifecycle = buckets.released_out_lifecycle

    def filter_chart(self, chart: str) -> Status:
        """Return a copy where every bucket only holds ``chart``."""
        return Status(**{
            name: {chart: list(getattr(self, name).get(chart, []))}
            for name in self.bucket_names()
        })

    def to_dict(self) -> dict[str, dict[str, list[str]]]:
        return {name: versions_of(getattr(self, name)) for name in self.bucket_names()}

    @property
    def summary(self) -> dict[str, int]:
        return {
            name: sum(len(v) for v in getattr(self, name).values())
            for name in self.bucket_names()
        }
