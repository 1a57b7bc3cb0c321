"""Constants shared across deploydetails domain models."""

SNAPSHOT_MARKER = "-SNAPSHOT"

DEFAULT_ARTIFACT_PATTERN = "[organisation]/[module]/[revision]/[artifact]-[revision](-[classifier]).[ext]"

PROPERTY_VALUE_SEPARATOR = ", "

MD5 = "MD5"
SHA1 = "SHA-1"
SHA256 = "SHA-256"

ALL_CONFIGURATIONS = "all"
