"""FleetAudit - authorization and accountability core for fleet maintenance."""

__version__ = "0.1.0"
