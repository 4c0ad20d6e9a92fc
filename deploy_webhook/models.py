from dataclasses import dataclass
from typing import List, Optional

@dataclass
class Settings:
    auth_key: str
    services_dir: str
    accepted_tags: List[str]
    image_registry: str
    host: str = "0.0.0.0"
    port: int = 8088
    log_file: Optional[str] = None
    log_level: str = "INFO"
    command_timeout: int = 300

@dataclass
class DeployRequest:
    service: str
    tag: str

@dataclass
class CommandResult:
    argv: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

class ConfigError(Exception):
    pass

class RequestInfoError(Exception):
    pass
