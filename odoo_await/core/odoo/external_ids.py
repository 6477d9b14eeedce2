"""External identifier (ir.model.data) operations.

Odoo stores external IDs as ``<module>.<name>`` rows in ``ir.model.data``
pointing at a ``(model, res_id)`` pair. Imports through the Odoo UI create
them automatically; through the API they must be created on purpose.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import ExternalIdNotFoundError
from .records import RecordService

logger = logging.getLogger(__name__)

IR_MODEL_DATA = "ir.model.data"
DEFAULT_MODULE = "__api__"


def external_id_key(external_id: str, module_name: Optional[str] = None) -> Tuple[str, str]:
    """Return the ``(module, name)`` pair an external ID is stored under.

    The name is kept verbatim, dots included; the module is ``module_name``
    or ``__api__``.
    """
    return module_name or DEFAULT_MODULE, external_id


class ExternalIdService:
    """Service for binding and resolving external identifiers."""

    def __init__(self, records: RecordService):
        """Initialize external ID service.

        Args:
            records: Record service used for lookups and delegated CRUD
        """
        self.records = records

    def create_external_id(
        self, model: str, record_id: int, external_id: str, module_name: Optional[str] = None
    ) -> int:
        """Bind ``external_id`` to an existing record.

        Returns:
            ID of the new ir.model.data row
        """
        module, name = external_id_key(external_id, module_name)
        xid = self.records.create(
            IR_MODEL_DATA,
            {
                "model": model,
                "name": name,
                "res_id": record_id,
                "module": module,
            },
        )
        logger.debug("Bound external ID %s.%s to %s,%s", module, name, model, record_id)
        return xid

    def resolve(
        self, external_id: str, fields: List[str], module_name: Optional[str] = None
    ) -> Dict[str, Any]:
        """Return the first ir.model.data row for ``external_id``.

        Raises:
            ExternalIdNotFoundError: If no row matches
        """
        module, name = external_id_key(external_id, module_name)
        rows = self.records.search_read(
            IR_MODEL_DATA,
            [["module", "=", module], ["name", "=", name]],
            fields,
        )
        if not rows:
            raise ExternalIdNotFoundError(external_id)
        return rows[0]

    def search_by_external_id(self, external_id: str, module_name: Optional[str] = None) -> int:
        """Return the record ID bound to ``external_id``."""
        return self.resolve(external_id, ["res_id"], module_name)["res_id"]

    def read_by_external_id(
        self, external_id: str, fields: Optional[List[str]] = None, module_name: Optional[str] = None
    ) -> Dict[str, Any]:
        """Read the single record bound to ``external_id``."""
        row = self.resolve(external_id, ["res_id", "model"], module_name)
        return self.records.read(row["model"], [row["res_id"]], fields)[0]

    def update_by_external_id(
        self, external_id: str, fields: Optional[Dict[str, Any]] = None, module_name: Optional[str] = None
    ) -> bool:
        """Update the record bound to ``external_id``."""
        row = self.resolve(external_id, ["res_id", "model"], module_name)
        return self.records.update(row["model"], row["res_id"], fields)

    def delete_by_external_id(self, external_id: str, module_name: Optional[str] = None) -> bool:
        """Delete the record bound to ``external_id``. The ir.model.data row goes with it."""
        row = self.resolve(external_id, ["res_id", "model"], module_name)
        return self.records.delete(row["model"], row["res_id"])
