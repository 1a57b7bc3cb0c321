"""Artifact identity objects fed into deploy-detail resolution."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class ArtifactMatchKey:
    """Coordinates used to select property specs for one artifact."""

    configuration: str
    group: str
    module: str
    version: str
    classifier: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class PublishArtifactInfo:
    """A file published by a build configuration, before project coordinates are known."""

    name: str
    extension: str
    type: str
    file: Path
    classifier: Optional[str] = None


@dataclass(frozen=True)
class ArtifactDescriptor:
    """One artifact to publish, with the publication it came from."""

    name: str
    extension: str
    type: str
    group: str
    module: str
    version: str
    file: Path
    publication: str
    classifier: Optional[str] = None

    @property
    def has_classifier(self) -> bool:
        return bool(self.classifier and self.classifier.strip())

    @property
    def display_name(self) -> str:
        suffix = f"-{self.classifier}" if self.has_classifier else ""
        return f"{self.group}:{self.module}:{self.version}:{self.name}{suffix}.{self.extension}"

    def match_key(self) -> ArtifactMatchKey:
        return ArtifactMatchKey(
            configuration=self.publication,
            group=self.group,
            module=self.module,
            version=self.version,
            classifier=self.classifier,
            type=self.type,
        )


@dataclass(frozen=True)
class ProjectCoordinates:
    """Group, name and version of the project owning a configuration."""

    group: str
    name: str
    version: str

    def descriptors_for_configuration(
        self, configuration: str, artifacts: Iterable[PublishArtifactInfo]
    ) -> List[ArtifactDescriptor]:
        """Attach project coordinates to every artifact of an archive configuration."""
        return [
            ArtifactDescriptor(
                name=info.name,
                extension=info.extension,
                type=info.type,
                group=self.group,
                module=self.name,
                version=self.version,
                file=Path(info.file),
                publication=configuration,
                classifier=info.classifier,
            )
            for info in artifacts
        ]
