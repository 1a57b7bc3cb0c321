from .artifact import ArtifactDescriptor, ArtifactMatchKey, ProjectCoordinates, PublishArtifactInfo
from .exceptions import (
    ArtifactFileMissing,
    ChecksumComputationError,
    DeployDetailsError,
    PropertySpecSyntaxError,
    RepositoryConfigurationMissing,
    TemplateSubstitutionError,
)
from .models import (
    ArtifactFailure,
    BatchOutcome,
    ChecksumSet,
    DeployDetail,
    PackageType,
    PublisherConfig,
)

__all__ = [
    "ArtifactDescriptor",
    "ArtifactMatchKey",
    "ProjectCoordinates",
    "PublishArtifactInfo",
    "ArtifactFileMissing",
    "ChecksumComputationError",
    "DeployDetailsError",
    "PropertySpecSyntaxError",
    "RepositoryConfigurationMissing",
    "TemplateSubstitutionError",
    "ArtifactFailure",
    "BatchOutcome",
    "ChecksumSet",
    "DeployDetail",
    "PackageType",
    "PublisherConfig",
]
