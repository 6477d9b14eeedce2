"""Configuration module for the Odoo client."""
from .settings import OdooConfig, load_settings

__all__ = ["OdooConfig", "load_settings"]
