"""Service wiring for the ASGI application."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from artifactdeploy.modules.deploydetails import DeployDetailsService

from .settings import Settings

log = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Container that wires plain-Python services with shared settings."""

    settings: Settings
    deploydetails_service: DeployDetailsService = field(init=False)

    def __post_init__(self) -> None:
        self.deploydetails_service = DeployDetailsService(self.settings)
        log.info("Services initialised for %s %s", self.settings.app_name, self.settings.version)
