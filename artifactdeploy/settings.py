"""Runtime configuration for the deploy details service."""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration values mapped from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Artifact Deploy Details API"
    version: str = "1.0.0"
    log_level: str = "INFO"

    # Publisher repositories
    publisher_repo_key: Optional[str] = None
    publisher_release_repo_key: Optional[str] = None
    publisher_snapshot_repo_key: Optional[str] = None
    publisher_m2_compatible: bool = True
    publisher_artifact_pattern: Optional[str] = None
    publisher_package_type: str = "gradle"

    # Properties attached to artifacts; specs read
    # "<configuration> <group>:<module>:<version>:<classifier>@<type> key:value, ..."
    artifact_property_specs: List[str] = Field(default_factory=list)
    default_properties: Dict[str, str] = Field(default_factory=dict)

    assembler_workers: int = 4


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance for dependency injection."""
    return Settings()
