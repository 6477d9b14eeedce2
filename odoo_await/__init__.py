"""odoo-await: a small Odoo XML-RPC client.

To use the client:
    from odoo_await.core.odoo import OdooAwait

To load connection settings from the environment:
    from odoo_await.config import load_settings
"""
