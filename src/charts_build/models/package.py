"""Package options models (packages/<name>/package.yaml)."""

from __future__ import annotations

from dataclasses import dataclass

from charts_build.models import UpstreamKind


@dataclass
class UpstreamOptions:
    url: str = ""
    subdirectory: str = ""
    commit: str = ""

    @property
    def kind(self) -> UpstreamKind:
        if self.url.startswith(("https://", "http://", "git@", "ssh://", "file://")) or self.url.endswith(".git"):
            return UpstreamKind.GIT
        return UpstreamKind.LOCAL

    @classmethod
    def from_dict(cls, d: dict) -> UpstreamOptions:
        return cls(
            url=str(d.get("url", "") or ""),
            subdirectory=str(d.get("subdirectory", "") or ""),
            commit=str(d.get("commit", "") or ""),
        )


@dataclass
class PackageOptions:
    name: str
    upstream: UpstreamOptions
    working_dir: str = "charts"

    @classmethod
    def from_dict(cls, name: str, d: dict) -> PackageOptions:
        return cls(
            name=name,
            upstream=UpstreamOptions.from_dict(d),
            working_dir=str(d.get("workingDir", "") or "charts"),
        )
