"""Odoo-specific exceptions for error handling."""
from __future__ import annotations
from typing import Any, Optional


class OdooError(Exception):
    """Base exception for all Odoo operations."""
    pass


class ValidationError(OdooError, ValueError):
    """Caller input rejected before any RPC call was made."""
    pass


class RelationCommandError(ValidationError):
    """Malformed many2many / one2many command.

    Attributes:
        field: Name of the offending field
    """

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Field '{field}': {message}")


class DomainError(ValidationError):
    """Search domain could not be normalized into filter triples."""
    pass


class OdooRPCError(OdooError):
    """Transport failure or fault reported by the Odoo server.

    Attributes:
        endpoint: XML-RPC endpoint URL that failed
        method: Remote method name (e.g. execute_kw)
        message: Error message from the server or transport
        fault_code: XML-RPC fault code or HTTP status, when known
    """

    def __init__(self, endpoint: str, method: str, message: str, fault_code: Optional[Any] = None):
        self.endpoint = endpoint
        self.method = method
        self.message = message
        self.fault_code = fault_code
        prefix = f"[{fault_code}] " if fault_code is not None else ""
        super().__init__(f"{prefix}{endpoint} {method}: {message}")


class AuthenticationError(OdooRPCError):
    """Odoo refused the credentials (authenticate returned no user ID)."""
    pass


class NotConnectedError(OdooRPCError):
    """Object call attempted before connect()."""
    pass


class ExternalIdNotFoundError(OdooError, LookupError):
    """No ir.model.data row matches the external identifier."""

    def __init__(self, external_id: str):
        self.external_id = external_id
        super().__init__(f"No matching record found for external identifier {external_id}")


class ExternalIdBindError(OdooError):
    """Record was created but binding its external identifier failed.

    The record is not rolled back. Callers can use ``record_id`` to retry the
    binding or to clean up.

    Attributes:
        model: Model of the created record
        record_id: ID of the record that now exists without an external ID
        external_id: External identifier that could not be bound
    """

    def __init__(self, model: str, record_id: int, external_id: str, cause: Exception):
        self.model = model
        self.record_id = record_id
        self.external_id = external_id
        self.cause = cause
        super().__init__(
            f"Created {model} record {record_id} but failed to bind external ID '{external_id}': {cause}"
        )
