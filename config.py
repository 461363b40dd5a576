from __future__ import annotations

import os
import yaml
from pathlib import Path
from typing import Dict, Any

from infrastructure.todoist.errors import TodoistPermissionError
from infrastructure.todoist.rest_client import API_BASE

DEFAULT_CONFIG_PATH = Path.home() / ".todoist_cli_config.yaml"
TOKEN_ENV_VARS = ("TODOIST_API_TOKEN", "TODOIST_TOKEN")


def user_config_path() -> Path:
    override = os.getenv("TODOIST_CLI_CONFIG")
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def _load_config() -> Dict[str, Any]:
    path = user_config_path()
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    path = user_config_path()
    if not data:
        if path.exists():
            path.unlink()
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def get_user_token() -> str:
    return str(_load_config().get("token", "") or "")


def set_user_token(value: str) -> None:
    data = _load_config()
    value = (value or "").strip()
    if value:
        data["token"] = value
    else:
        data.pop("token", None)
    _save_config(data)


def resolve_token() -> str:
    """Environment first, then the stored user token."""
    for name in TOKEN_ENV_VARS:
        env_token = (os.getenv(name) or "").strip()
        if env_token:
            return env_token
    return get_user_token()


def require_token() -> str:
    token = resolve_token()
    if not token:
        raise TodoistPermissionError(
            "Todoist API token not configured: run `todoist auth --token <token>` or set TODOIST_API_TOKEN"
        )
    return token


def get_api_base() -> str:
    return (os.getenv("TODOIST_API_BASE") or API_BASE).rstrip("/")


def get_sync_url() -> str:
    return f"{get_api_base()}/sync"
