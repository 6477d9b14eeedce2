"""High-level Odoo API combining the client and its services."""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple

from .client import OdooClient, REQUEST_TIMEOUT, DEFAULT_DB, DEFAULT_USERNAME, DEFAULT_PASSWORD
from .domain import DomainInput
from .exceptions import ExternalIdBindError, OdooError
from .external_ids import DEFAULT_MODULE, ExternalIdService
from .records import RecordIds, RecordService

logger = logging.getLogger(__name__)


class OdooAwait:
    """One object exposing every record and external ID operation.

    Usage:
        odoo = OdooAwait(base_url="http://localhost:8069", db="odoo_db",
                         username="admin", password="admin")
        odoo.connect()
        partner_id = odoo.create("res.partner", {"name": "Kool Keith"}, external_id="kk")
        odoo.update("res.partner", partner_id, {"category_id": Add([2, 5])})
        odoo.read_by_external_id("kk", ["name", "category_id"])
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        port: Optional[int] = None,
        db: str = DEFAULT_DB,
        username: str = DEFAULT_USERNAME,
        password: str = DEFAULT_PASSWORD,
        basic_auth: Optional[Tuple[str, str]] = None,
        timeout: float = REQUEST_TIMEOUT,
        client: Optional[OdooClient] = None,
    ):
        self.client = client or OdooClient(
            base_url=base_url,
            port=port,
            db=db,
            username=username,
            password=password,
            basic_auth=basic_auth,
            timeout=timeout,
        )
        self.records = RecordService(self.client)
        self.external_ids = ExternalIdService(self.records)

    @classmethod
    def from_config(cls, config) -> "OdooAwait":
        return cls(client=OdooClient.from_config(config))

    @property
    def uid(self) -> int:
        return self.client.uid

    def connect(self) -> int:
        """Authenticate; must be called before any other operation."""
        return self.client.connect()

    def disconnect(self) -> None:
        self.client.disconnect()

    def execute_kw(self, model: str, method: str, params: Optional[List[Any]] = None) -> Any:
        """Raw execute_kw passthrough for methods not covered below."""
        return self.client.execute_kw(model, method, params)

    # Records

    def create(
        self,
        model: str,
        fields: Optional[Dict[str, Any]] = None,
        external_id: Optional[str] = None,
        module_name: Optional[str] = None,
    ) -> int:
        """Create a record, optionally binding an external ID to it.

        Args:
            model: Model name (e.g. 'res.partner')
            fields: Initial values
            external_id: If given, stored as '<module_name>.<external_id>'
            module_name: External ID namespace (default: __api__)

        Returns:
            ID of the new record

        Raises:
            ExternalIdBindError: The record was created but the external ID
                was not bound; ``record_id`` holds the orphan's ID
        """
        record_id = self.records.create(model, fields)
        if external_id:
            try:
                self.external_ids.create_external_id(model, record_id, external_id, module_name or DEFAULT_MODULE)
            except OdooError as exc:
                logger.warning(
                    "Created %s record %s but binding external ID '%s' failed", model, record_id, external_id
                )
                raise ExternalIdBindError(model, record_id, external_id, exc) from exc
        return record_id

    def read(self, model: str, record_ids: RecordIds, fields: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        return self.records.read(model, record_ids, fields)

    def update(self, model: str, record_ids: RecordIds, fields: Optional[Dict[str, Any]] = None) -> bool:
        return self.records.update(model, record_ids, fields)

    def delete(self, model: str, record_ids: RecordIds) -> bool:
        return self.records.delete(model, record_ids)

    def search(self, model: str, domain: DomainInput = None) -> List[int]:
        return self.records.search(model, domain)

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
        return self.records.search_read(model, domain, fields, offset=offset, limit=limit, order=order, context=context)

    def get_fields(self, model: str, attributes: Optional[List[str]] = None) -> Dict[str, Dict[str, Any]]:
        return self.records.get_fields(model, attributes)

    def action(self, model: str, action: str, record_ids: RecordIds) -> Any:
        return self.records.action(model, action, record_ids)

    # External identifiers

    def create_external_id(
        self, model: str, record_id: int, external_id: str, module_name: Optional[str] = None
    ) -> int:
        return self.external_ids.create_external_id(model, record_id, external_id, module_name)

    def search_by_external_id(self, external_id: str, module_name: Optional[str] = None) -> int:
        return self.external_ids.search_by_external_id(external_id, module_name)

    def read_by_external_id(
        self, external_id: str, fields: Optional[List[str]] = None, module_name: Optional[str] = None
    ) -> Dict[str, Any]:
        return self.external_ids.read_by_external_id(external_id, fields, module_name)

    def update_by_external_id(
        self, external_id: str, fields: Optional[Dict[str, Any]] = None, module_name: Optional[str] = None
    ) -> bool:
        return self.external_ids.update_by_external_id(external_id, fields, module_name)

    def delete_by_external_id(self, external_id: str, module_name: Optional[str] = None) -> bool:
        return self.external_ids.delete_by_external_id(external_id, module_name)
