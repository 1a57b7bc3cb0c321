"""Choose the repository an artifact path is deployed to."""

from __future__ import annotations

from typing import Optional

from artifactdeploy.modules.deploydetails.domain import PublisherConfig
from artifactdeploy.modules.deploydetails.domain.constants import SNAPSHOT_MARKER


def _is_set(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def select_target_repository(artifact_path: str, config: PublisherConfig) -> Optional[str]:
    """Snapshot repo for ``-SNAPSHOT`` paths, else the release repo, else the default.

    Returns ``None`` when nothing is configured; raising is left to the caller.
    """
    if _is_set(config.snapshot_repo_key) and SNAPSHOT_MARKER in artifact_path:
        return config.snapshot_repo_key
    if _is_set(config.release_repo_key):
        return config.release_repo_key
    if _is_set(config.repo_key):
        return config.repo_key
    return None
