"""Domain exceptions."""


class FleetAuditError(Exception):
    """Base exception for FleetAudit."""

    pass


class PermissionDenied(FleetAuditError):
    """User does not have permission for the requested action."""

    pass


class NotFound(FleetAuditError):
    """Requested record was not found."""

    pass


class ValidationError(FleetAuditError):
    """Validation failed for input data."""

    pass
