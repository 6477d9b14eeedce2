"""Pytest shared fixtures: network guard and the fake Odoo server."""
import os
import pathlib
import sys

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from odoo_await.core.odoo import OdooAwait
from odoo_fakes import FakeOdoo


def pytest_collection_modifyitems(config, items):
    """Skip live-server tests unless ODOO_INTEGRATION=1."""
    if os.environ.get("ODOO_INTEGRATION") == "1":
        return
    skip_live = pytest.mark.skip(reason="set ODOO_INTEGRATION=1 to run against a live Odoo")
    for item in items:
        if item.get_closest_marker("integration"):
            item.add_marker(skip_live)


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """
    Prevent unit tests from hitting a live Odoo server.

    Integration tests are explicitly marked with @pytest.mark.integration and
    are allowed to perform real HTTP calls by skipping this fixture.
    """
    if request.node.get_closest_marker("integration"):
        return

    def _stub_post(url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP POST in unit test: {url}")

    monkeypatch.setattr(requests, "post", _stub_post)


# ─────────────────────────────────────────────────────────────────────────────
# Fake Odoo server
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture()
def fake_odoo(monkeypatch, _block_network):
    """In-memory Odoo server wired in place of requests.post."""
    server = FakeOdoo()
    server.relations[("res.partner", "category_id")] = "res.partner.category"
    monkeypatch.setattr(requests, "post", server.post)
    return server


@pytest.fixture()
def odoo(fake_odoo):
    """Connected OdooAwait talking to the fake server."""
    client = OdooAwait(base_url="http://odoo.test:8069", db="odoo_db", username="admin", password="admin")
    client.connect()
    fake_odoo.calls.clear()
    return client
