import subprocess
from typing import List

import pytest

from deploy_webhook.models import Settings
from server import create_app

AUTH_KEY = "s3cret-key"

class FakeDocker:
    """Stands in for subprocess.run and records every argv."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.failures = {}

    def fail(self, subcommand: str, stderr: str = "boom", code: int = 1) -> None:
        self.failures[subcommand] = (code, stderr)

    def __call__(self, argv, capture_output=False, text=False, timeout=None):
        self.calls.append(list(argv))
        subcommand = "compose" if argv[1] == "compose" else argv[1]
        code, stderr = self.failures.get(subcommand, (0, ""))
        return subprocess.CompletedProcess(argv, code, stdout="", stderr=stderr)

@pytest.fixture
def services_dir(tmp_path):
    base = tmp_path / "services"
    for name in ("api", "web"):
        (base / name).mkdir(parents=True)
        (base / name / "docker-compose.yml").write_text("services: {}\n", encoding="utf-8")
    (base / "README.md").write_text("not a service\n", encoding="utf-8")
    return base

@pytest.fixture
def settings(services_dir):
    return Settings(
        auth_key=AUTH_KEY,
        services_dir=str(services_dir),
        accepted_tags=["release", "main"],
        image_registry="ghcr.io/example",
    )

@pytest.fixture
def docker(monkeypatch):
    fake = FakeDocker()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake

@pytest.fixture
def client(settings, docker):
    app = create_app(settings, ["api", "web"])
    app.config["TESTING"] = True
    return app.test_client()
