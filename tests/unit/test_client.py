"""Tests for the XML-RPC transport and session handling."""
import xmlrpc.client

import pytest
import requests

from odoo_await.core.odoo.client import OdooClient, Session
from odoo_await.core.odoo.exceptions import (
    AuthenticationError,
    NotConnectedError,
    OdooRPCError,
)
from odoo_fakes import StubResponse


class TestUrls:
    def test_defaults_to_localhost(self):
        client = OdooClient()
        assert client.base_url == "http://localhost"
        assert client.endpoint_url("common") == "http://localhost/xmlrpc/2/common"

    def test_port_from_url(self):
        client = OdooClient("https://erp.example.com:8443/")
        assert client.secure is True
        assert client.port == 8443
        assert client.endpoint_url("object") == "https://erp.example.com:8443/xmlrpc/2/object"

    def test_explicit_port_wins(self):
        client = OdooClient("http://odoo:8000", port=8069)
        assert client.base_url == "http://odoo:8069"

    def test_rejects_invalid_url(self):
        with pytest.raises(ValueError, match="Invalid Odoo base URL"):
            OdooClient("odoo.example.com")

    def test_rejects_unknown_endpoint(self):
        with pytest.raises(ValueError, match="Unknown XML-RPC endpoint"):
            OdooClient().endpoint_url("report")


class TestConnect:
    def test_connect_returns_uid_and_stores_session(self, fake_odoo):
        client = OdooClient("http://odoo.test:8069")
        assert client.uid == 0

        assert client.connect() == 2
        assert client.session == Session(db="odoo_db", uid=2, password="admin")

        call = fake_odoo.calls[0]
        assert call.endpoint == "common"
        assert call.method == "authenticate"
        assert call.params == ["odoo_db", "admin", "admin", {}]

    def test_bad_credentials_raise_authentication_error(self, fake_odoo):
        client = OdooClient("http://odoo.test:8069", password="wrong")
        with pytest.raises(AuthenticationError, match="invalid credentials"):
            client.connect()
        assert client.session is None

    def test_disconnect_forgets_session(self, fake_odoo):
        client = OdooClient("http://odoo.test:8069")
        client.connect()
        client.disconnect()
        with pytest.raises(NotConnectedError):
            client.execute_kw("res.partner", "search", [[]])

    def test_server_version_needs_no_login(self, fake_odoo):
        assert OdooClient("http://odoo.test:8069").server_version()["server_version"] == "17.0"

    def test_basic_auth_is_forwarded(self, fake_odoo):
        client = OdooClient("http://odoo.test:8069", basic_auth=("proxy", "pw"))
        client.connect()
        assert fake_odoo.calls[0].auth == ("proxy", "pw")


class TestExecuteKw:
    def test_requires_connect(self, fake_odoo):
        with pytest.raises(NotConnectedError, match="call connect"):
            OdooClient("http://odoo.test:8069").execute_kw("res.partner", "search", [[]])
        assert fake_odoo.calls == []

    def test_prefixes_session_params(self, fake_odoo):
        client = OdooClient("http://odoo.test:8069")
        client.connect()
        client.execute_kw("res.partner", "search", [[["name", "=", "x"]]])

        call = fake_odoo.calls[-1]
        assert call.endpoint == "object"
        assert call.method == "execute_kw"
        assert call.params == ["odoo_db", 2, "admin", "res.partner", "search", [["name", "=", "x"]]]

    def test_caller_params_are_not_mutated(self, fake_odoo):
        client = OdooClient("http://odoo.test:8069")
        client.connect()
        params = [[[]]]
        client.execute_kw("res.partner", "search", params)
        assert params == [[[]]]


class TestErrors:
    def _connected(self, monkeypatch, post):
        client = OdooClient("http://odoo.test:8069")
        client._session = Session("odoo_db", 2, "admin")
        monkeypatch.setattr(requests, "post", post)
        return client

    def test_fault_is_translated(self, monkeypatch):
        body = xmlrpc.client.dumps(xmlrpc.client.Fault(2, "Record does not exist"), methodresponse=True)
        client = self._connected(monkeypatch, lambda url, **kw: StubResponse(body.encode(), 200, url))

        with pytest.raises(OdooRPCError) as excinfo:
            client.execute_kw("res.partner", "read", [[999]])
        assert excinfo.value.fault_code == 2
        assert excinfo.value.method == "execute_kw"
        assert "Record does not exist" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, xmlrpc.client.Fault)

    def test_http_error_is_translated(self, monkeypatch):
        client = self._connected(monkeypatch, lambda url, **kw: StubResponse(b"Bad Gateway", 502, url))
        with pytest.raises(OdooRPCError) as excinfo:
            client.execute_kw("res.partner", "search", [[]])
        assert excinfo.value.fault_code == 502
        assert excinfo.value.endpoint.endswith("/xmlrpc/2/object")

    def test_transport_error_is_translated(self, monkeypatch):
        def boom(url, **kw):
            raise requests.ConnectionError("connection refused")

        client = self._connected(monkeypatch, boom)
        with pytest.raises(OdooRPCError, match="connection refused") as excinfo:
            client.execute_kw("res.partner", "search", [[]])
        assert isinstance(excinfo.value.__cause__, requests.ConnectionError)

    def test_malformed_response_is_translated(self, monkeypatch):
        client = self._connected(monkeypatch, lambda url, **kw: StubResponse(b"<html>oops", 200, url))
        with pytest.raises(OdooRPCError, match="Malformed XML-RPC response"):
            client.execute_kw("res.partner", "search", [[]])

    def test_timeout_is_passed_to_requests(self, monkeypatch):
        seen = {}
        body = xmlrpc.client.dumps(([1, 2],), methodresponse=True)

        def post(url, **kw):
            seen.update(kw)
            return StubResponse(body.encode(), 200, url)

        client = self._connected(monkeypatch, post)
        client.timeout = 4.5
        assert client.execute_kw("res.partner", "search", [[]]) == [1, 2]
        assert seen["timeout"] == 4.5
        assert seen["headers"] == {"Content-Type": "text/xml"}
