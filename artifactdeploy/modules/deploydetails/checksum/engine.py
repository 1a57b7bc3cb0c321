"""Compute MD5/SHA1/SHA256 digests for artifact files."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Optional

from artifactdeploy.modules.deploydetails.domain import (
    ArtifactFileMissing,
    ChecksumComputationError,
    ChecksumSet,
)

log = logging.getLogger(__name__)

CHUNK_SIZE = 65536


def calculate_checksums(file_path: Path, publication: Optional[str] = None) -> ChecksumSet:
    """Hash ``file_path`` in a single buffered pass.

    Raises ``ArtifactFileMissing`` before any read when the file is absent and
    ``ChecksumComputationError`` when reading fails part way.
    """
    path = Path(file_path)
    if path.exists() and not path.is_file():
        raise ArtifactFileMissing(
            f"'{path.absolute()}' is not a regular file and cannot be published"
            f" from publication {publication or '-'}",
            publication=publication,
            file=path,
        )
    if not path.exists():
        raise ArtifactFileMissing(
            f"File '{path.absolute()}' does not exist, and need to be published"
            f" from publication {publication or '-'}",
            publication=publication,
            file=path,
        )

    md5 = hashlib.md5()
    sha1 = hashlib.sha1()
    sha256 = hashlib.sha256()
    try:
        with open(path, "rb") as fh:
            for chunk in iter(lambda: fh.read(CHUNK_SIZE), b""):
                md5.update(chunk)
                sha1.update(chunk)
                sha256.update(chunk)
    except OSError as exc:
        raise ChecksumComputationError(
            f"Failed to calculate checksums for artifact: {path.absolute()}",
            publication=publication,
            file=path,
        ) from exc

    checksums = ChecksumSet(md5=md5.hexdigest(), sha1=sha1.hexdigest(), sha256=sha256.hexdigest())
    log.debug("Checksums for %s md5=%s sha1=%s", path, checksums.md5, checksums.sha1)
    return checksums
