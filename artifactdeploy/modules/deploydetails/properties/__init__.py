from .merger import add_props, merge_properties
from .specs import ArtifactSpecs, PropertySpec, parse_artifact_spec

__all__ = ["add_props", "merge_properties", "ArtifactSpecs", "PropertySpec", "parse_artifact_spec"]
