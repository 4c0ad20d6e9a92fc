import os
import logging
from pathlib import Path
from typing import List, Optional
import yaml
from dotenv import load_dotenv
from .models import Settings, ConfigError

DEFAULT_SETTINGS_PATH = Path("config/settings.yml")
DEFAULT_SERVICES_DIR = "~/projects/services"
DEFAULT_TAGS: List[str] = ["release", "main"]
DEFAULT_REGISTRY = "ghcr.io/robertjshirts"

# Keys that may come from the settings file or the environment
ENV_KEYS = [
    "AUTH_KEY",
    "HOST",
    "PORT",
    "LOG_FILE",
    "LOG_LEVEL",
    "SERVICES_DIR",
    "ACCEPTED_TAGS",
    "IMAGE_REGISTRY",
    "COMMAND_TIMEOUT",
]

def _load_file(settings_path: Path) -> dict:
    if not settings_path.exists():
        return {}
    with open(settings_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Settings file {settings_path} must contain a mapping")
    logging.debug(f"Loaded settings from {settings_path}")
    return {str(k).upper(): v for k, v in raw.items()}

def _parse_int(name: str, value, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}")

def _parse_tags(value) -> List[str]:
    if value is None or value == "":
        return list(DEFAULT_TAGS)
    if isinstance(value, str):
        tags = [t.strip() for t in value.split(",")]
    elif isinstance(value, list):
        tags = [str(t).strip() for t in value]
    else:
        raise ConfigError(f"ACCEPTED_TAGS must be a comma separated string or a list, got {value!r}")
    return [t for t in tags if t]

def _parse_log_level(value) -> str:
    level = str(value or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"LOG_LEVEL must be a logging level name, got {value!r}")
    return level

def load_settings(settings_path: Optional[Path] = None, environ: Optional[dict] = None) -> Settings:
    """Build Settings from the settings file, then the environment.

    Environment values win over the file. Raises ConfigError when AUTH_KEY
    is missing or a numeric value does not parse.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ
    if settings_path is None:
        settings_path = Path(environ.get("DEPLOY_SETTINGS") or DEFAULT_SETTINGS_PATH)

    cfg = _load_file(settings_path)
    for key in ENV_KEYS:
        if environ.get(key):
            cfg[key] = environ[key]

    auth_key = cfg.get("AUTH_KEY")
    if not auth_key:
        raise ConfigError("Missing AUTH_KEY environment variable")

    services_dir = os.path.expanduser(str(cfg.get("SERVICES_DIR") or DEFAULT_SERVICES_DIR))

    return Settings(
        auth_key=str(auth_key),
        services_dir=services_dir,
        accepted_tags=_parse_tags(cfg.get("ACCEPTED_TAGS")),
        image_registry=str(cfg.get("IMAGE_REGISTRY") or DEFAULT_REGISTRY).rstrip("/"),
        host=str(cfg.get("HOST") or "0.0.0.0"),
        port=_parse_int("PORT", cfg.get("PORT"), 8088),
        # Empty strings count as unset
        log_file=cfg.get("LOG_FILE") or None,
        log_level=_parse_log_level(cfg.get("LOG_LEVEL")),
        command_timeout=_parse_int("COMMAND_TIMEOUT", cfg.get("COMMAND_TIMEOUT"), 300),
    )
