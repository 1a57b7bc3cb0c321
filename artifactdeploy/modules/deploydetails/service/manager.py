"""Deploy details service used by the HTTP layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from artifactdeploy.modules.deploydetails.domain import (
    ArtifactDescriptor,
    BatchOutcome,
    ProjectCoordinates,
    PublishArtifactInfo,
    PublisherConfig,
)
from artifactdeploy.modules.deploydetails.properties import ArtifactSpecs
from artifactdeploy.settings import Settings

from .assembler import DeployDetailSink, DeployDetailsAssembler


@dataclass
class OperationResult:
    ok: bool
    message: str
    data: Any = None

    def as_dict(self) -> Dict[str, Any]:
        payload = {"status": "true" if self.ok else "false", "msg": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class PayloadError(ValueError):
    """Raised when a resolve request is missing required fields."""


class DeployDetailsService:
    """Builds publisher config and property specs from settings and resolves batches."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.config = PublisherConfig.from_settings(settings)
        self.specs = ArtifactSpecs.parse(settings.artifact_property_specs)
        self.default_properties: Dict[str, str] = {
            str(key): str(value) for key, value in settings.default_properties.items()
        }
        self.log = logging.getLogger(self.__class__.__name__)
        self.log.info(
            "Publisher repo=%s release=%s snapshot=%s m2=%s specs=%d",
            self.config.repo_key or "-",
            self.config.release_repo_key or "-",
            self.config.snapshot_repo_key or "-",
            self.config.m2_compatible,
            len(self.specs),
        )

    def new_assembler(
        self,
        extra_properties: Optional[Mapping[str, str]] = None,
        sink: Optional[DeployDetailSink] = None,
    ) -> DeployDetailsAssembler:
        defaults = dict(self.default_properties)
        defaults.update(extra_properties or {})
        return DeployDetailsAssembler(
            self.config,
            self.specs,
            defaults,
            sink=sink,
            workers=self.settings.assembler_workers,
        )

    def resolve_batch(
        self,
        artifacts: List[ArtifactDescriptor],
        extra_properties: Optional[Mapping[str, str]] = None,
    ) -> BatchOutcome:
        return self.new_assembler(extra_properties).assemble(artifacts)

    def resolve_payload(self, payload: Mapping[str, Any]) -> OperationResult:
        """Resolve a JSON request of the form::

            {"project": {"group": ..., "name": ..., "version": ...},
             "publications": [{"name": "archives", "artifacts": [{"name": ..., "extension": ...,
                               "type": ..., "classifier": ..., "file": ...}]}],
             "properties": {"build.number": "42"}}
        """
        try:
            artifacts = self._parse_artifacts(payload)
            extra = self._parse_properties(payload)
        except PayloadError as exc:
            return OperationResult(False, str(exc))
        outcome = self.resolve_batch(artifacts, extra)
        data = {
            "deployDetails": [detail.to_dict() for detail in outcome.details],
            "failures": [failure.to_dict() for failure in outcome.failures],
        }
        message = "ok" if outcome.ok else f"{len(outcome.failures)} artifact(s) failed"
        return OperationResult(outcome.ok, message, data)

    @staticmethod
    def _parse_artifacts(payload: Mapping[str, Any]) -> List[ArtifactDescriptor]:
        project_data = payload.get("project")
        if not isinstance(project_data, dict):
            raise PayloadError("project must be an object with group, name and version")
        missing = [name for name in ("group", "name", "version") if not project_data.get(name)]
        if missing:
            raise PayloadError(f"project requires {', '.join(missing)}")
        project = ProjectCoordinates(
            group=str(project_data["group"]),
            name=str(project_data["name"]),
            version=str(project_data["version"]),
        )

        publications = payload.get("publications")
        if not isinstance(publications, list) or not publications:
            raise PayloadError("publications must be a non-empty list")

        descriptors: List[ArtifactDescriptor] = []
        for publication in publications:
            name = publication.get("name") if isinstance(publication, dict) else None
            if not name or not isinstance(name, str):
                raise PayloadError("every publication needs a string name")
            items = publication.get("artifacts") or []
            if not isinstance(items, list):
                raise PayloadError(f"artifacts of publication {name} must be a list")
            infos = [DeployDetailsService._parse_artifact_info(name, item) for item in items]
            descriptors.extend(project.descriptors_for_configuration(name, infos))
        return descriptors

    @staticmethod
    def _parse_artifact_info(publication: str, item: Any) -> PublishArtifactInfo:
        if not isinstance(item, dict):
            raise PayloadError(f"artifacts of publication {publication} must be objects")
        missing = [key for key in ("name", "extension", "file") if not item.get(key)]
        if missing:
            raise PayloadError(f"artifact in publication {publication} requires {', '.join(missing)}")
        wrong = [
            key
            for key in ("name", "extension", "type", "classifier", "file")
            if item.get(key) is not None and not isinstance(item[key], str)
        ]
        if wrong:
            raise PayloadError(f"artifact in publication {publication}: {', '.join(wrong)} must be strings")
        return PublishArtifactInfo(
            name=item["name"],
            extension=item["extension"],
            type=item.get("type") or item["extension"],
            file=item["file"],
            classifier=item.get("classifier"),
        )

    @staticmethod
    def _parse_properties(payload: Mapping[str, Any]) -> Dict[str, str]:
        properties = payload.get("properties")
        if properties is None:
            return {}
        if not isinstance(properties, dict):
            raise PayloadError("properties must be an object")
        return {str(key): str(value) for key, value in properties.items()}
