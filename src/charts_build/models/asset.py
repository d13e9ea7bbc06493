"""Chart version records read from a Helm repository index."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Asset:
    name: str
    version: str
    digest: str = ""
    created: str = ""
    annotations: dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_dict(cls, name: str, d: dict) -> Asset:
        return cls(
            name=name,
            version=str(d.get("version", "")),
            digest=d.get("digest", "") or "",
            created=str(d.get("created", "") or ""),
            annotations=dict(d.get("annotations") or {}),
        )


# chart name -> ordered versions of that chart
AssetsMap = dict[str, list[Asset]]


def versions_of(assets: AssetsMap) -> dict[str, list[str]]:
    """Reduce an assets map to {chart: [version, ...]}."""
    return {chart: [a.version for a in versions] for chart, versions in assets.items()}
