"""Core client logic.

Module Structure:
    - odoo/ : Odoo XML-RPC client library (transport, domains, relation
      commands, record and external ID services)

Usage Pattern:
    from odoo_await.core.odoo import OdooAwait

    odoo = OdooAwait.from_config(load_settings())
    odoo.connect()
"""
