"""User configuration and credentials.

The user config lives in ``$PKGPUSH_HOME/config.toml`` (``~/.pkgpush`` by
default) and may hold the registry URL and stored credentials:

    api_url = "https://registry.internal/api"
    username = "me"
    key = "0123abcd"
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from .api import DEFAULT_API_URL
from .errors import ConfigError
from .models import ApiKey, Auth, Credentials
from .toml import load_toml


class UserConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: str | None = None
    password: str | None = None
    key: str | None = None
    api_url: str | None = None
    timeout: float | None = None


def config_path() -> Path:
    home = os.environ.get("PKGPUSH_HOME")
    base = Path(home) if home else Path.home() / ".pkgpush"
    return base / "config.toml"


def read_user_config(path: Path | None = None) -> UserConfig:
    """Load the user config. A missing file is an empty config."""
    path = path or config_path()
    if not path.exists():
        return UserConfig()
    try:
        return UserConfig.model_validate(load_toml(path))
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {path}: {exc}") from exc


def resolve_api_url(option: str | None, user_config: UserConfig) -> str:
    """--api-url / PKGPUSH_API_URL, then the user config, then the default."""
    return option or user_config.api_url or DEFAULT_API_URL


def resolve_auth(
    user: str | None, password: str | None, user_config: UserConfig
) -> Auth:
    """Pick the credentials for registry calls.

    Order: --user/--pass, then a stored API key, then a stored
    username/password.

    Raises:
        ConfigError: If --user is given without a password, or nothing is
            configured.
    """
    if user:
        if not password:
            raise ConfigError("Password required when --user is given (use --pass)")
        return Credentials(username=user, password=password)
    if user_config.key:
        return ApiKey(key=user_config.key)
    if user_config.username and user_config.password:
        return Credentials(username=user_config.username, password=user_config.password)
    raise ConfigError(
        f"No credentials found. Pass --user and --pass, or store a key in {config_path()}"
    )
