"""Assemble one deploy detail per artifact of a publish batch."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Union

from artifactdeploy.modules.deploydetails.checksum import calculate_checksums
from artifactdeploy.modules.deploydetails.domain import (
    ArtifactDescriptor,
    ArtifactFailure,
    BatchOutcome,
    DeployDetail,
    DeployDetailsError,
    PublisherConfig,
    RepositoryConfigurationMissing,
    TemplateSubstitutionError,
)
from artifactdeploy.modules.deploydetails.path import resolve_artifact_path, unresolved_tokens
from artifactdeploy.modules.deploydetails.properties import ArtifactSpecs, merge_properties
from artifactdeploy.modules.deploydetails.repository import select_target_repository


class DeployDetailSink:
    """Append-only, thread-safe collection of deploy details.

    Entries are never deduplicated: two publications pointing at the same file
    each keep their own detail.
    """

    def __init__(self) -> None:
        self._items: List[DeployDetail] = []
        self._lock = threading.Lock()

    def append(self, detail: DeployDetail) -> None:
        with self._lock:
            self._items.append(detail)

    def snapshot(self) -> List[DeployDetail]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[DeployDetail]:
        return iter(self.snapshot())


class DeployDetailsAssembler:
    """Resolve checksums, path, repository and properties for each artifact."""

    def __init__(
        self,
        config: PublisherConfig,
        specs: Optional[ArtifactSpecs] = None,
        default_properties: Optional[Mapping[str, str]] = None,
        *,
        sink: Optional[DeployDetailSink] = None,
        workers: int = 1,
    ) -> None:
        self.config = config
        self.specs = specs or ArtifactSpecs()
        self.default_properties: Dict[str, str] = dict(default_properties or {})
        self.sink = sink if sink is not None else DeployDetailSink()
        self.workers = max(1, int(workers))
        self.log = logging.getLogger(self.__class__.__name__)

    def resolve(self, artifact: ArtifactDescriptor) -> DeployDetail:
        """Compute the deploy detail for ``artifact`` without recording it."""
        try:
            return self._resolve(artifact)
        except DeployDetailsError as exc:
            if exc.artifact is None:
                exc.artifact = artifact.display_name
            if exc.publication is None:
                exc.publication = artifact.publication
            raise

    def build(self, artifact: ArtifactDescriptor) -> DeployDetail:
        """Resolve ``artifact`` and append the result to the sink."""
        detail = self.resolve(artifact)
        self.sink.append(detail)
        return detail

    def assemble(self, artifacts: Iterable[ArtifactDescriptor]) -> BatchOutcome:
        """Build every artifact of a batch; failures are recorded per artifact.

        Details are appended to the sink in input order even when resolved on
        several workers.
        """
        batch = list(artifacts)
        self.log.info("Resolving deploy details for %d artifacts workers=%d", len(batch), self.workers)
        if self.workers == 1 or len(batch) <= 1:
            results = [self._attempt(artifact) for artifact in batch]
        else:
            with ThreadPoolExecutor(max_workers=min(self.workers, len(batch))) as pool:
                futures = [pool.submit(self._attempt, artifact) for artifact in batch]
                results = [future.result() for future in futures]

        outcome = BatchOutcome()
        for result in results:
            if isinstance(result, ArtifactFailure):
                outcome.failures.append(result)
                continue
            self.sink.append(result)
            outcome.details.append(result)
        self.log.info(
            "Deploy details resolved ok=%d failed=%d",
            len(outcome.details),
            len(outcome.failures),
        )
        return outcome

    def _attempt(self, artifact: ArtifactDescriptor) -> Union[DeployDetail, ArtifactFailure]:
        try:
            return self.resolve(artifact)
        except DeployDetailsError as exc:
            self.log.warning(
                "Skipping artifact %s from publication %s: %s",
                artifact.display_name,
                artifact.publication,
                exc,
            )
            return ArtifactFailure(artifact=artifact, error=exc)

    def _resolve(self, artifact: ArtifactDescriptor) -> DeployDetail:
        checksums = calculate_checksums(artifact.file, artifact.publication)

        artifact_path = resolve_artifact_path(
            self.config.artifact_pattern,
            artifact,
            m2_compatible=self.config.m2_compatible,
        )
        if not artifact_path.strip():
            raise TemplateSubstitutionError(
                f"pattern '{self.config.artifact_pattern}' resolved to an empty path",
                file=artifact.file,
            )
        leftover = unresolved_tokens(artifact_path)
        if leftover:
            raise TemplateSubstitutionError(
                f"unresolved tokens {', '.join(leftover)} in artifact path '{artifact_path}'",
                file=artifact.file,
            )

        target_repository = select_target_repository(artifact_path, self.config)
        if not target_repository:
            raise RepositoryConfigurationMissing(
                f"no snapshot, release or default repository configured for '{artifact_path}'",
                file=artifact.file,
            )

        properties = merge_properties(self.default_properties, artifact, self.specs)
        self.log.debug(
            "Resolved %s -> %s/%s (%d properties)",
            artifact.display_name,
            target_repository,
            artifact_path,
            len(properties),
        )
        return DeployDetail(
            target_repository=target_repository,
            artifact_path=artifact_path,
            file=artifact.file,
            checksums=checksums,
            artifact=artifact,
            properties=properties,
            package_type=self.config.package_type,
        )
