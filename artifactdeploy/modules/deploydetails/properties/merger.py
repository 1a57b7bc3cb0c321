"""Merge default properties with the properties of matching artifact specs."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Tuple

from artifactdeploy.modules.deploydetails.domain import ArtifactDescriptor
from artifactdeploy.modules.deploydetails.domain.constants import PROPERTY_VALUE_SEPARATOR

from .specs import ArtifactSpecs


def add_props(target: Dict[str, str], pairs: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """Accumulate multi-value props: a repeated key gets ``", " + value`` appended."""
    for key, value in pairs:
        if key not in target:
            target[key] = value
        else:
            target[key] = target[key] + PROPERTY_VALUE_SEPARATOR + value
    return target


def merge_properties(
    defaults: Optional[Mapping[str, str]],
    artifact: ArtifactDescriptor,
    specs: ArtifactSpecs,
) -> Dict[str, str]:
    merged: Dict[str, str] = dict(defaults or {})
    return add_props(merged, specs.properties_for(artifact.match_key()))
