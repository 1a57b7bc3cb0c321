"""Artifact property specs: rules attaching key/value metadata to matching artifacts.

A rule in text form reads::

    <configuration> <group>:<module>:<version>:<classifier>@<type> key:value, key:value

``all`` as configuration and ``*`` in any coordinate match everything;
trailing coordinates may be left out. ``?`` and ``*`` also work as partial
wildcards, e.g. ``com.example.*``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from artifactdeploy.modules.deploydetails.domain import ArtifactMatchKey, PropertySpecSyntaxError
from artifactdeploy.modules.deploydetails.domain.constants import ALL_CONFIGURATIONS

log = logging.getLogger(__name__)

PropertyPair = Tuple[str, str]

_PAIR_RE = re.compile(r"^\s*([^:=]+?)\s*[:=]\s*(.*?)\s*$")


def _selector_matches(pattern: Optional[str], value: Optional[str]) -> bool:
    if pattern is None or pattern == "*":
        return True
    return fnmatchcase(value or "", pattern)


@dataclass(frozen=True)
class PropertySpec:
    """Selector plus an ordered multimap of properties; ``None`` selectors match anything."""

    properties: Tuple[PropertyPair, ...] = ()
    configuration: Optional[str] = None
    group: Optional[str] = None
    module: Optional[str] = None
    version: Optional[str] = None
    classifier: Optional[str] = None
    type: Optional[str] = None

    @classmethod
    def of(
        cls,
        properties: Union[Mapping[str, object], Iterable[Tuple[str, object]]],
        **selectors: Optional[str],
    ) -> "PropertySpec":
        """Build a spec, turning every property value into a plain ``str``."""
        items = properties.items() if isinstance(properties, Mapping) else properties
        pairs = tuple((str(key), str(value)) for key, value in items)
        return cls(properties=pairs, **selectors)

    def matches(self, key: ArtifactMatchKey) -> bool:
        if self.configuration is not None and self.configuration.lower() != ALL_CONFIGURATIONS:
            if not _selector_matches(self.configuration, key.configuration):
                return False
        return (
            _selector_matches(self.group, key.group)
            and _selector_matches(self.module, key.module)
            and _selector_matches(self.version, key.version)
            and _selector_matches(self.classifier, key.classifier)
            and _selector_matches(self.type, key.type)
        )


def _optional(field: str) -> Optional[str]:
    field = field.strip()
    if not field or field == "*":
        return None
    return field


def _parse_pairs(text: str, rule: str) -> Tuple[PropertyPair, ...]:
    pairs: List[PropertyPair] = []
    for chunk in text.split(","):
        if not chunk.strip():
            continue
        match = _PAIR_RE.match(chunk)
        if not match:
            raise PropertySpecSyntaxError(f"property '{chunk.strip()}' must be key:value in rule '{rule}'")
        pairs.append((match.group(1), match.group(2)))
    if not pairs:
        raise PropertySpecSyntaxError(f"rule '{rule}' declares no properties")
    return tuple(pairs)


def parse_artifact_spec(text: str) -> PropertySpec:
    """Parse one textual rule into a ``PropertySpec``."""
    parts = text.strip().split(None, 2)
    if len(parts) < 3:
        raise PropertySpecSyntaxError(
            f"rule '{text.strip()}' must be '<configuration> <group>:<module>:<version>:<classifier>@<type> key:value'"
        )
    configuration, notation, props = parts

    coordinates, _, type_ = notation.partition("@")
    fields = coordinates.split(":")
    if len(fields) > 4:
        raise PropertySpecSyntaxError(f"too many coordinates in '{notation}'")
    fields += [""] * (4 - len(fields))
    group, module, version, classifier = (_optional(f) for f in fields)

    return PropertySpec(
        properties=_parse_pairs(props, text.strip()),
        configuration=None if configuration.lower() == ALL_CONFIGURATIONS else configuration,
        group=group,
        module=module,
        version=version,
        classifier=classifier,
        type=_optional(type_),
    )


class ArtifactSpecs:
    """Ordered collection of property specs."""

    def __init__(self, specs: Sequence[PropertySpec] = ()) -> None:
        self._specs: Tuple[PropertySpec, ...] = tuple(specs)

    @classmethod
    def parse(cls, lines: Iterable[str]) -> "ArtifactSpecs":
        specs: List[PropertySpec] = []
        for raw_line in lines:
            for rule in raw_line.split(";"):
                rule = rule.strip()
                if not rule or rule.startswith("#"):
                    continue
                specs.append(parse_artifact_spec(rule))
        log.debug("Loaded %d artifact property specs", len(specs))
        return cls(specs)

    def __iter__(self) -> Iterator[PropertySpec]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def properties_for(self, key: ArtifactMatchKey) -> List[PropertyPair]:
        """All pairs from matching specs, in spec order then declaration order."""
        pairs: List[PropertyPair] = []
        for spec in self._specs:
            if spec.matches(key):
                pairs.extend(spec.properties)
        return pairs
