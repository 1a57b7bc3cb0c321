"""Errors raised while resolving deploy details."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class DeployDetailsError(RuntimeError):
    """Base error carrying the artifact context needed to act on a failure."""

    def __init__(
        self,
        message: str,
        *,
        artifact: Optional[str] = None,
        publication: Optional[str] = None,
        file: Optional[Path] = None,
    ) -> None:
        super().__init__(message)
        self.artifact = artifact
        self.publication = publication
        self.file = file


class ArtifactFileMissing(DeployDetailsError):
    """The artifact's backing file does not exist."""


class ChecksumComputationError(DeployDetailsError):
    """Reading the artifact file failed while hashing it."""


class RepositoryConfigurationMissing(DeployDetailsError):
    """Neither snapshot, release nor default repository key resolved."""


class TemplateSubstitutionError(DeployDetailsError):
    """The artifact path pattern is malformed or left tokens unresolved."""


class PropertySpecSyntaxError(ValueError):
    """A property spec rule could not be parsed."""
