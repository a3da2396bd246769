"""
CLI configuration stored as JSON in ~/.ready-admin/config.json.

READY_ADMIN_CONFIG points at another file. A missing or corrupt file reads as
defaults rather than failing.
"""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from ready_admin.pagination import DEFAULT_PAGE_SIZE
from ready_admin.transport.http import DEFAULT_BASE_URL

CONFIG_ENV_VAR = "READY_ADMIN_CONFIG"
DEFAULT_CONFIG_FILE = Path.home() / ".ready-admin" / "config.json"


class AdminConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    access_token: Optional[str] = None
    email: Optional[str] = None
    page_size: int = DEFAULT_PAGE_SIZE
    log_level: str = "WARNING"


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else DEFAULT_CONFIG_FILE


def load_config() -> AdminConfig:
    try:
        return AdminConfig.model_validate(json.loads(config_path().read_text()))
    except (FileNotFoundError, json.JSONDecodeError, ValidationError):
        return AdminConfig()


def save_config(cfg: AdminConfig) -> None:
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(cfg.model_dump_json(indent=2))


def clear_credentials() -> AdminConfig:
    """Forget the stored token but keep base URL and preferences."""
    cfg = load_config().model_copy(update={"access_token": None, "email": None})
    save_config(cfg)
    return cfg
