"""Dataclasses describing publisher configuration and resolved deploy details."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from .artifact import ArtifactDescriptor
from .constants import DEFAULT_ARTIFACT_PATTERN, MD5, SHA1, SHA256

if TYPE_CHECKING:
    from artifactdeploy.settings import Settings


class PackageType(str, Enum):
    GENERIC = "generic"
    MAVEN = "maven"
    GRADLE = "gradle"
    IVY = "ivy"


@dataclass(frozen=True)
class PublisherConfig:
    """Repository keys and layout rules for one publisher."""

    repo_key: Optional[str] = None
    release_repo_key: Optional[str] = None
    snapshot_repo_key: Optional[str] = None
    m2_compatible: bool = True
    artifact_pattern: str = DEFAULT_ARTIFACT_PATTERN
    package_type: PackageType = PackageType.GRADLE

    @classmethod
    def from_settings(cls, settings: "Settings") -> "PublisherConfig":
        return cls(
            repo_key=settings.publisher_repo_key,
            release_repo_key=settings.publisher_release_repo_key,
            snapshot_repo_key=settings.publisher_snapshot_repo_key,
            m2_compatible=settings.publisher_m2_compatible,
            artifact_pattern=settings.publisher_artifact_pattern or DEFAULT_ARTIFACT_PATTERN,
            package_type=PackageType(settings.publisher_package_type),
        )


@dataclass(frozen=True)
class ChecksumSet:
    md5: str
    sha1: str
    sha256: str

    def as_dict(self) -> Dict[str, str]:
        return {MD5: self.md5, SHA1: self.sha1, SHA256: self.sha256}


@dataclass(frozen=True)
class DeployDetail:
    """Everything needed to upload one artifact to one repository."""

    target_repository: str
    artifact_path: str
    file: Path
    checksums: ChecksumSet
    artifact: ArtifactDescriptor
    properties: Mapping[str, str] = field(default_factory=dict)
    package_type: PackageType = PackageType.GRADLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "targetRepository": self.target_repository,
            "artifactPath": self.artifact_path,
            "file": str(self.file),
            "checksums": self.checksums.as_dict(),
            "properties": dict(self.properties),
            "packageType": self.package_type.value,
            "publication": self.artifact.publication,
        }


@dataclass
class ArtifactFailure:
    artifact: ArtifactDescriptor
    error: Exception

    def to_dict(self) -> Dict[str, Any]:
        return {
            "artifact": self.artifact.display_name,
            "publication": self.artifact.publication,
            "file": str(self.artifact.file),
            "error": type(self.error).__name__,
            "message": str(self.error),
        }


@dataclass
class BatchOutcome:
    """Result of assembling one publish batch."""

    details: List[DeployDetail] = field(default_factory=list)
    failures: List[ArtifactFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_first(self) -> None:
        """Re-raise the first recorded failure, for callers that abort on any error."""
        if self.failures:
            raise self.failures[0].error
