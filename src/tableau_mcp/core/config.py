from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from . import client as _client
from .client import DEFAULT_API_VERSION, DEFAULT_SITE_NAME, TableauClient

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUTHY


def _env_str(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


@dataclass(frozen=True)
class TableauConfig:
    server: str
    api_version: str = DEFAULT_API_VERSION
    default_site_name: str = DEFAULT_SITE_NAME
    omit_default_site_name: bool = True
    boundary: Optional[str] = None
    debug: bool = False
    username: Optional[str] = None
    password: Optional[str] = None
    site: str = ""
    impersonate_user_id: Optional[str] = None

    def client_kwargs(self) -> dict:
        return {
            "server": self.server,
            "api_version": self.api_version,
            "default_site_name": self.default_site_name,
            "omit_default_site_name": self.omit_default_site_name,
            "boundary": self.boundary,
        }


def load_env_config(*, use_dotenv: bool = True) -> TableauConfig:
    """Load Tableau settings from environment (optional .env)."""
    if use_dotenv:
        _client.load_dotenv()
    return TableauConfig(
        server=os.getenv("TABLEAU_SERVER_URL", "").strip(),
        api_version=_env_str("TABLEAU_API_VERSION") or DEFAULT_API_VERSION,
        default_site_name=_env_str("TABLEAU_DEFAULT_SITE_NAME") or DEFAULT_SITE_NAME,
        omit_default_site_name=_env_flag("TABLEAU_OMIT_DEFAULT_SITE_NAME", True),
        boundary=_env_str("TABLEAU_BOUNDARY"),
        debug=_env_flag("TABLEAU_DEBUG", False),
        username=_env_str("TABLEAU_USERNAME"),
        password=os.getenv("TABLEAU_PASSWORD") or None,
        site=os.getenv("TABLEAU_SITE", "").strip(),
        impersonate_user_id=_env_str("TABLEAU_IMPERSONATE_USER_ID"),
    )


def create_client_from_env(**kwargs) -> TableauClient:
    """Create a TableauClient from environment variables."""
    config = load_env_config()
    if not config.server:
        raise ValueError("Missing TABLEAU_SERVER_URL in environment.")
    return TableauClient(**{**config.client_kwargs(), **kwargs})


__all__ = ["TableauConfig", "load_env_config", "create_client_from_env"]
