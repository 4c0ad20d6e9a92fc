import logging
from pathlib import Path
from typing import List
from .models import ConfigError

COMPOSE_FILENAME = "docker-compose.yml"

def discover_services(services_dir: str) -> List[str]:
    """Names of the subdirectories of services_dir, sorted."""
    base = Path(services_dir)
    if not base.is_dir():
        raise ConfigError(f"Services directory not found: {services_dir}")
    services = sorted(p.name for p in base.iterdir() if p.is_dir())
    logging.info(f"Found {len(services)} services in {services_dir}: {', '.join(services)}")
    return services

def compose_file(services_dir: str, service: str) -> str:
    return str(Path(services_dir) / service / COMPOSE_FILENAME)
