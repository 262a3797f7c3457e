"""Async client for the Caddy web server's admin API."""

from caddy_admin.client import CaddyAdminClient
from caddy_admin.config import ClientSettings, create_config, load_client_settings
from caddy_admin.exceptions import AdminApiError, CaddyAdminException, DecodeError, SettingsError
from caddy_admin.result import Err, Ok, Result, UnwrapError

__all__ = [
    "AdminApiError",
    "CaddyAdminClient",
    "CaddyAdminException",
    "ClientSettings",
    "DecodeError",
    "Err",
    "Ok",
    "Result",
    "SettingsError",
    "UnwrapError",
    "create_config",
    "load_client_settings",
]
