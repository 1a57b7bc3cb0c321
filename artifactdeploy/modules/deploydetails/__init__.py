"""Deploy details module exports."""

from .service.manager import DeployDetailsService
from .controller import router as deploydetails_router

__all__ = ["DeployDetailsService", "deploydetails_router"]
