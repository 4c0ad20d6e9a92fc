import logging
import subprocess
from typing import List
from .models import CommandResult

def _run(argv: List[str], timeout: int) -> CommandResult:
    logging.info(f"Running: {' '.join(argv)}")
    try:
        r = subprocess.run(argv, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as e:
        return CommandResult(argv=argv, returncode=127, stderr=str(e))
    except subprocess.TimeoutExpired:
        return CommandResult(argv=argv, returncode=-1, stderr=f"timed out after {timeout}s")
    return CommandResult(argv=argv, returncode=r.returncode, stdout=r.stdout, stderr=r.stderr)

def image_ref(registry: str, service: str, tag: str) -> str:
    return f"{registry}/{service}:{tag}"

def pull_image(registry: str, service: str, tag: str, timeout: int = 300) -> CommandResult:
    return _run(["docker", "pull", image_ref(registry, service, tag)], timeout)

def restart_service(compose_path: str, service: str, timeout: int = 300) -> CommandResult:
    return _run(["docker", "compose", "-f", compose_path, "restart", service], timeout)
