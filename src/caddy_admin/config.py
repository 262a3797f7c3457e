from __future__ import annotations

from dataclasses import dataclass

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from caddy_admin.exceptions import SettingsError

DEFAULT_URL = "http://localhost:2019"
DEFAULT_TIMEOUT = 30.0

_DEFAULTS: dict[str, object] = {
    "admin": {
        "url": DEFAULT_URL,
        "timeout": DEFAULT_TIMEOUT,
    },
}


@dataclass(frozen=True)
class ClientSettings:
    """Connection settings for one admin API client.

    Attributes:
        base_url: Admin endpoint including the port, e.g. ``http://localhost:2019``.
        username: Optional HTTP Basic username.
        password: Optional HTTP Basic password. An empty string is a valid password.
        timeout: Default per-request deadline in seconds.
    """

    base_url: str = DEFAULT_URL
    username: str | None = None
    password: str | None = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and self.password is not None


def create_config(
    yaml_path: str = "caddy-admin.yaml",
    env_prefix: str = "CADDY",
    defaults: dict[str, object] | None = None,
    *,
    url: str | None = None,
    username: str | None = None,
    password: str | None = None,
    timeout: float | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file.
        env_prefix: Prefix for environment variables, e.g. ``CADDY__ADMIN__URL``.
        defaults: Default configuration values.
        url: Override the admin URL.
        username: Override the basic-auth username.
        password: Override the basic-auth password.
        timeout: Override the request timeout.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]

    overrides = _build_overrides(url=url, username=username, password=password, timeout=timeout)
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def _build_overrides(**values: object) -> dict[str, object]:
    """Build override dict from explicit parameters, skipping unset ones."""
    admin = {key: value for key, value in values.items() if value is not None}
    if not admin:
        return {}
    return {"admin": admin}


def load_client_settings(cfg: ConfigurationSet | None = None) -> ClientSettings:
    """Convert a configuration set into ClientSettings.

    Raises:
        SettingsError: If the URL is empty or the timeout is not a positive number.
    """
    if cfg is None:
        cfg = create_config()

    base_url = str(cfg.get("admin.url", DEFAULT_URL) or "").strip()
    if not base_url:
        raise SettingsError("admin.url must not be empty")

    raw_timeout = cfg.get("admin.timeout", DEFAULT_TIMEOUT)
    try:
        timeout = float(str(raw_timeout))
    except ValueError as e:
        raise SettingsError(f"admin.timeout must be a number, got {raw_timeout!r}") from e
    if timeout <= 0:
        raise SettingsError(f"admin.timeout must be positive, got {timeout}")

    username = cfg.get("admin.username")
    password = cfg.get("admin.password")
    return ClientSettings(
        base_url=base_url,
        username=None if username is None else str(username),
        password=None if password is None else str(password),
        timeout=timeout,
    )
