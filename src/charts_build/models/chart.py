"""Chart.yaml metadata models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Field order used by Helm when it serializes chart metadata
METADATA_KEY_ORDER: tuple[str, ...] = (
    "name",
    "home",
    "sources",
    "version",
    "description",
    "keywords",
    "maintainers",
    "icon",
    "apiVersion",
    "condition",
    "tags",
    "appVersion",
    "deprecated",
    "annotations",
    "kubeVersion",
    "dependencies",
    "type",
)


def _drop_empty(d: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in d.items() if v not in ("", None, [], {}, False)}


@dataclass
class Maintainer:
    name: str = ""
    email: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> Maintainer:
        return cls(
            name=d.get("name", ""),
            email=d.get("email", ""),
            url=d.get("url", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return _drop_empty({"name": self.name, "email": self.email, "url": self.url})


@dataclass
class ChartDependency:
    name: str = ""
    version: str = ""
    repository: str = ""
    condition: str = ""
    alias: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: dict) -> ChartDependency:
        known = {"name", "version", "repository", "condition", "alias"}
        return cls(
            name=d.get("name", ""),
            version=str(d.get("version", "")),
            repository=d.get("repository", ""),
            condition=d.get("condition", ""),
            alias=d.get("alias", ""),
            extra={k: v for k, v in d.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        out = _drop_empty({
            "name": self.name,
            "version": self.version,
            "repository": self.repository,
            "condition": self.condition,
            "alias": self.alias,
        })
        for key in sorted(self.extra):
            out[key] = self.extra[key]
        return out


@dataclass
class ChartMetadata:
    name: str = ""
    version: str = ""
    app_version: str = ""
    description: str = ""
    api_version: str = ""
    chart_type: str = ""
    home: str = ""
    icon: str = ""
    condition: str = ""
    tags: str = ""
    kube_version: str = ""
    deprecated: bool = False
    keywords: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    maintainers: list[Maintainer] = field(default_factory=list)
    dependencies: list[ChartDependency] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)
    # keys Helm does not know about, kept as-is
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: dict) -> ChartMetadata:
        if not d:
            return cls()
        return cls(
            name=d.get("name", ""),
            version=str(d.get("version", "")),
            app_version=str(d.get("appVersion", "")),
            description=d.get("description", ""),
            api_version=d.get("apiVersion", ""),
            chart_type=d.get("type", ""),
            home=d.get("home", ""),
            icon=d.get("icon", ""),
            condition=d.get("condition", ""),
            tags=d.get("tags", ""),
            kube_version=d.get("kubeVersion", ""),
            deprecated=bool(d.get("deprecated", False)),
            keywords=d.get("keywords") or [],
            sources=d.get("sources") or [],
            maintainers=[Maintainer.from_dict(m) for m in d.get("maintainers") or []],
            dependencies=[ChartDependency.from_dict(dep) for dep in d.get("dependencies") or []],
            annotations=d.get("annotations") or {},
            extra={k: v for k, v in d.items() if k not in METADATA_KEY_ORDER},
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize in Helm's canonical key order, omitting empty fields."""
        values: dict[str, Any] = {
            "name": self.name,
            "home": self.home,
            "sources": self.sources,
            "version": self.version,
            "description": self.description,
            "keywords": self.keywords,
            "maintainers": [m.to_dict() for m in self.maintainers],
            "icon": self.icon,
            "apiVersion": self.api_version,
            "condition": self.condition,
            "tags": self.tags,
            "appVersion": self.app_version,
            "deprecated": self.deprecated,
            "annotations": dict(sorted(self.annotations.items())),
            "kubeVersion": self.kube_version,
            "dependencies": [dep.to_dict() for dep in self.dependencies],
            "type": self.chart_type,
        }
        out = _drop_empty({key: values[key] for key in METADATA_KEY_ORDER})
        for key in sorted(self.extra):
            out[key] = self.extra[key]
        return out
