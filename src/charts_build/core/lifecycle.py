"""Classify chart versions against lifecycle rules.

Every function here is pure: it takes assets maps and a lifecycle policy and
returns new maps. Buckets only contain charts that have at least one version
in them, and versions keep the order they had in the input.
"""

from __future__ import annotations

import logging

from charts_build.models.asset import Asset, AssetsMap
from charts_build.models.lifecycle import CrossBranchBuckets, LifecyclePolicy

logger = logging.getLogger(__name__)


def _append(bucket: AssetsMap, chart: str, asset: Asset) -> None:
    bucket.setdefault(chart, []).append(asset)


def split_by_lifecycle(assets: AssetsMap, policy: LifecyclePolicy) -> tuple[AssetsMap, AssetsMap]:
    """Split the versions of the current branch into (inside, outside) the lifecycle."""
    inside: AssetsMap = {}
    outside: AssetsMap = {}
    for chart, versions in assets.items():
        for asset in versions:
            if policy.in_lifecycle(asset.version):
                _append(inside, chart, asset)
            else:
                _append(outside, chart, asset)
    return inside, outside


def is_released(version: str, released_versions: list[Asset]) -> bool:
    return any(r.version == version for r in released_versions)


def compare_released_and_development(
    released: AssetsMap,
    development: AssetsMap,
    policy: LifecyclePolicy,
) -> CrossBranchBuckets:
    """Cross every development version with the released set and the lifecycle window.

    - released and in the lifecycle: OK
    - not released and out of the lifecycle: OK
    - not released and in the lifecycle: should be released (WARN)
    - released and out of the lifecycle: should not have been released (ERROR)
    """
    buckets = CrossBranchBuckets()
    for chart, versions in development.items():
        released_versions = released.get(chart, [])
        for asset in versions:
            was_released = is_released(asset.version, released_versions)
            in_lifecycle = policy.in_lifecycle(asset.version)

            if was_released and in_lifecycle:
                _append(buckets.released_in_lifecycle, chart, asset)
            elif not was_released and not in_lifecycle:
                _append(buckets.not_released_out_lifecycle, chart, asset)
            elif not was_released and in_lifecycle:
                _append(buckets.not_released_in_lifecycle, chart, asset)
            else:
                _append(buckets.released_out_lifecycle, chart, asset)
    return buckets


def separate_release_from_forward_port(
    not_released_in_lifecycle: AssetsMap,
    policy: LifecyclePolicy,
    to_be_released: AssetsMap | None = None,
    to_be_forward_ported: AssetsMap | None = None,
) -> tuple[AssetsMap, AssetsMap]:
    """Route unreleased in-lifecycle versions to (to be released, to be forward-ported).

    Release candidates are dropped from both. If the release decision fails
    for a version, the error propagates; the optional output maps passed in
    keep whatever was routed before it.
    """
    released_out = {} if to_be_released is None else to_be_released
    forward_out = {} if to_be_forward_ported is None else to_be_forward_ported

    for chart, versions in not_released_in_lifecycle.items():
        for asset in versions:
            to_release = policy.should_release(asset.version)
            if policy.is_release_candidate(asset.version):
                logger.debug("skipping release candidate %s %s", chart, asset.version)
                continue
            if to_release:
                _append(released_out, chart, asset)
            else:
                _append(forward_out, chart, asset)
    return released_out, forward_out
