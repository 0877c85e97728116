from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

import yaml
from dotenv import dotenv_values

from .errors import ConfigError


DEFAULT_BASE_URL = "https://pic2speak-backend.onrender.com/api/v1"


@dataclass
class ApiPrefs:
    base_url: str
    timeout: float | None = None


@dataclass
class SessionPrefs:
    credential_file: Path
    token_key: str = "adminToken"


@dataclass
class Settings:
    api: ApiPrefs
    session: SessionPrefs
    log_level: str

    admin_email: str
    admin_password: str


def load_settings(config_path: str = "config.yaml") -> Settings:
    project_root = Path(__file__).resolve().parent.parent
    env_path = project_root / ".env"
    config_file = Path(config_path)
    if not config_file.exists():
        config_file = project_root / config_path
    raw_env = dotenv_values(env_path) if env_path.exists() else {}
    env = {str(k).lstrip("\ufeff"): (v or "") for k, v in raw_env.items()}

    def get_env(name: str, default: str = "") -> str:
        # Process environment overrides .env file.
        v = os.getenv(name)
        if v is not None and v != "":
            return v.strip()
        return str(env.get(name, default)).replace("\ufeff", "").strip()

    cfg: dict = {}
    if config_file.exists():
        with open(config_file, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"{config_file} must contain a mapping")

    api_cfg = cfg.get("api") or {}
    session_cfg = cfg.get("session") or {}
    logging_cfg = cfg.get("logging") or {}

    timeout = api_cfg.get("timeout")
    credential_file = Path(
        session_cfg.get("credential_file", "~/.pic2speak-admin/session.json")
    ).expanduser()

    return Settings(
        api=ApiPrefs(
            base_url=get_env(
                "PIC2SPEAK_API_URL", api_cfg.get("base_url", DEFAULT_BASE_URL)
            ).rstrip("/"),
            timeout=float(timeout) if timeout is not None else None,
        ),
        session=SessionPrefs(
            credential_file=credential_file,
            token_key=str(session_cfg.get("token_key", "adminToken")),
        ),
        log_level=get_env(
            "PIC2SPEAK_LOG_LEVEL", str(logging_cfg.get("level", "INFO"))
        ).upper(),
        admin_email=get_env("PIC2SPEAK_ADMIN_EMAIL", ""),
        admin_password=get_env("PIC2SPEAK_ADMIN_PASSWORD", ""),
    )
