"""Odoo record CRUD and search operations."""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Union

from .client import OdooClient
from .domain import DomainInput, normalize_domain
from .relations import encode_fields

logger = logging.getLogger(__name__)

RecordIds = Union[int, List[int]]


def _as_id_list(record_ids: RecordIds) -> List[int]:
    if isinstance(record_ids, (list, tuple)):
        return list(record_ids)
    return [record_ids]


class RecordService:
    """Service for creating, reading, updating and searching Odoo records."""

    def __init__(self, client: OdooClient):
        """Initialize record service.

        Args:
            client: Connected Odoo client
        """
        self.client = client

    def create(self, model: str, fields: Optional[Dict[str, Any]] = None) -> int:
        """Create a record.

        Args:
            model: Model name (e.g. 'res.partner')
            fields: Initial values; relational fields may use relation commands

        Returns:
            ID of the new record
        """
        values = encode_fields(fields)
        record_id = self.client.execute_kw(model, "create", [[values]])
        logger.debug("Created %s record %s", model, record_id)
        return record_id

    def read(self, model: str, record_ids: RecordIds, fields: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        """Fetch record data.

        Records come back in server order; match on ``id`` if order matters.

        Args:
            model: Model name
            record_ids: One ID or a list of IDs
            fields: Fields to return (default: all fields)

        Returns:
            List of field maps
        """
        params: List[Any] = [[_as_id_list(record_ids)]]
        if fields:
            params.append({"fields": list(fields)})
        return self.client.execute_kw(model, "read", params)

    def update(self, model: str, record_ids: RecordIds, fields: Optional[Dict[str, Any]] = None) -> bool:
        """Write the same values to one or several records.

        Returns:
            True; failures surface as OdooRPCError
        """
        values = encode_fields(fields)
        return self.client.execute_kw(model, "write", [[record_ids, values]])

    def delete(self, model: str, record_ids: RecordIds) -> bool:
        """Delete one or several records.

        Returns:
            True; failures surface as OdooRPCError
        """
        self.client.execute_kw(model, "unlink", [[record_ids]])
        logger.debug("Deleted %s record(s) %s", model, record_ids)
        return True

    def search(self, model: str, domain: DomainInput = None) -> List[int]:
        """Return IDs of the records matching ``domain`` (all records if empty)."""
        return self.client.execute_kw(model, "search", [[normalize_domain(domain)]])

    def search_read(
        self,
        model: str,
        domain: DomainInput = None,
        fields: Optional[List[str]] = None,
        offset: int = 0,
        limit: int = 0,
        order: str = "",
        context: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """Search and read in one round trip.

        Args:
            model: Model name
            domain: Filter expression (see ``normalize_domain``)
            fields: Fields to return (default: all fields)
            offset: Number of records to skip
            limit: Maximum number of records (0 means no limit)
            order: Sort specification, e.g. 'name desc, id'
            context: Optional Odoo context (lang, tz, active_test...)

        Returns:
            List of field maps
        """
        options: Dict[str, Any] = {
            "fields": list(fields or []),
            "offset": offset,
            "limit": limit,
            "order": order,
        }
        if context is not None:
            options["context"] = context
        return self.client.execute_kw(model, "search_read", [[normalize_domain(domain)], options])

    def get_fields(self, model: str, attributes: Optional[List[str]] = None) -> Dict[str, Dict[str, Any]]:
        """Describe the fields of ``model``.

        Args:
            model: Model name
            attributes: Attributes to return per field, e.g. ['type', 'string'];
                all attributes when omitted

        Returns:
            Mapping of field name to attribute map
        """
        return self.client.execute_kw(model, "fields_get", [[], {"attributes": list(attributes or [])}])

    def action(self, model: str, action: str, record_ids: RecordIds) -> Any:
        """Run a model method (e.g. 'action_confirm') on records.

        Odoo commonly returns False or None when a button action succeeds;
        the raw response is passed through.
        """
        return self.client.execute_kw(model, action, [[record_ids]])
