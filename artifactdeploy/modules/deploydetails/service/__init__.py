from .assembler import DeployDetailSink, DeployDetailsAssembler
from .manager import DeployDetailsService, OperationResult

__all__ = ["DeployDetailSink", "DeployDetailsAssembler", "DeployDetailsService", "OperationResult"]
