"""Application ports - interfaces for external adapters."""

from fleetaudit.application.ports.permission_checker import PermissionChecker
from fleetaudit.application.ports.session_registry import SessionRegistry
from fleetaudit.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionChecker",
    "SessionRegistry",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
