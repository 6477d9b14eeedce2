"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from odoo_await.core.odoo.client import (
    DEFAULT_BASE_URL,
    DEFAULT_DB,
    DEFAULT_PASSWORD,
    DEFAULT_USERNAME,
    REQUEST_TIMEOUT,
)

logger = logging.getLogger(__name__)


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.debug("Loaded %s from /run/secrets", secret_name)
                return secret_value
        except OSError as e:
            logger.warning("Failed to read /run/secrets/%s: %s", secret_name, e)

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            logger.debug("Loaded %s from environment", env_var)
            return secret_value

    return None


def _get_int(var_name: str) -> Optional[int]:
    """Parse an optional integer environment variable."""
    raw = os.environ.get(var_name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"Environment variable {var_name} must be an integer, got '{raw}'.") from None


def _get_float(var_name: str, default: float) -> float:
    raw = os.environ.get(var_name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"Environment variable {var_name} must be a number, got '{raw}'.") from None


@dataclass
class OdooConfig:
    """Odoo connection configuration container."""
    base_url: str = DEFAULT_BASE_URL
    port: Optional[int] = None
    db: str = DEFAULT_DB
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD

    # HTTP basic auth in front of Odoo (reverse proxy)
    basic_auth_user: str = ""
    basic_auth_password: str = ""

    timeout: float = REQUEST_TIMEOUT

    @property
    def basic_auth(self) -> Optional[Tuple[str, str]]:
        """(user, password) when basic auth is configured, else None."""
        if not self.basic_auth_user:
            return None
        return (self.basic_auth_user, self.basic_auth_password)


def load_settings() -> OdooConfig:
    """Load Odoo connection settings from environment and /run/secrets."""
    password = _load_secret_from_file("odoo_password", "ODOO_PW") or DEFAULT_PASSWORD
    basic_auth_password = _load_secret_from_file("odoo_basic_auth_password", "ODOO_BASIC_AUTH_PASSWORD") or ""

    config = OdooConfig(
        base_url=os.environ.get("ODOO_BASE_URL", DEFAULT_BASE_URL),
        port=_get_int("ODOO_PORT"),
        db=os.environ.get("ODOO_DB", DEFAULT_DB),
        username=os.environ.get("ODOO_USER", DEFAULT_USERNAME),
        password=password,
        basic_auth_user=os.environ.get("ODOO_BASIC_AUTH_USER", ""),
        basic_auth_password=basic_auth_password,
        timeout=_get_float("ODOO_TIMEOUT", REQUEST_TIMEOUT),
    )

    logger.info("Odoo settings: url=%s; port=%s; db=%s; user=%s", config.base_url, config.port, config.db, config.username)
    if config.password == DEFAULT_PASSWORD:
        logger.warning("Default Odoo password in use. Set ODOO_PW or /run/secrets/odoo_password.")

    return config
