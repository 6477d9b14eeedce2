"""Odoo XML-RPC client library.

This package provides a modular, testable interface to the Odoo external API.

Architecture:
- client.py: XML-RPC transport, authentication and session
- domain.py: Search domain normalization
- relations.py: Many2many / one2many command encoding
- records.py: Record CRUD, search and field introspection
- external_ids.py: ir.model.data binding and lookups
- api.py: OdooAwait, one object exposing every operation
- exceptions.py: Typed exceptions for error handling

Usage:
    # Using the combined API (recommended)
    from odoo_await.core.odoo import OdooAwait, Add

    odoo = OdooAwait(base_url="http://localhost:8069", db="odoo_db")
    odoo.connect()
    partner_id = odoo.create("res.partner", {"name": "Alice", "category_id": [1, 2]})

    # Using service classes
    from odoo_await.core.odoo import OdooClient, RecordService

    client = OdooClient("http://localhost:8069", db="odoo_db")
    client.connect()
    RecordService(client).search("res.partner", {"name": "Alice"})
"""
from .client import (
    OdooClient,
    Session,
    REQUEST_TIMEOUT,
    COMMON_ENDPOINT,
    OBJECT_ENDPOINT,
)
from .exceptions import (
    OdooError,
    ValidationError,
    RelationCommandError,
    DomainError,
    OdooRPCError,
    AuthenticationError,
    NotConnectedError,
    ExternalIdNotFoundError,
    ExternalIdBindError,
)
from .domain import (
    EqualityMap,
    SingleFilter,
    FilterList,
    normalize_domain,
)
from .relations import (
    RelationCommand,
    Create,
    Update,
    Add,
    Remove,
    Delete,
    Clear,
    Replace,
    encode_fields,
    encode_command,
    parse_command,
)
from .records import RecordService
from .external_ids import (
    ExternalIdService,
    IR_MODEL_DATA,
    DEFAULT_MODULE,
    external_id_key,
)
from .api import OdooAwait

__all__ = [
    # Client
    "OdooClient",
    "Session",
    "REQUEST_TIMEOUT",
    "COMMON_ENDPOINT",
    "OBJECT_ENDPOINT",

    # Exceptions
    "OdooError",
    "ValidationError",
    "RelationCommandError",
    "DomainError",
    "OdooRPCError",
    "AuthenticationError",
    "NotConnectedError",
    "ExternalIdNotFoundError",
    "ExternalIdBindError",

    # Domains
    "EqualityMap",
    "SingleFilter",
    "FilterList",
    "normalize_domain",

    # Relation commands
    "RelationCommand",
    "Create",
    "Update",
    "Add",
    "Remove",
    "Delete",
    "Clear",
    "Replace",
    "encode_fields",
    "encode_command",
    "parse_command",

    # Services
    "RecordService",
    "ExternalIdService",
    "OdooAwait",

    # External IDs
    "IR_MODEL_DATA",
    "DEFAULT_MODULE",
    "external_id_key",
]
