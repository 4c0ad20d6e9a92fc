import subprocess

from deploy_webhook import docker as docker_mod

def test_pull_argv(docker):
    result = docker_mod.pull_image("ghcr.io/example", "api", "main")
    assert result.ok
    assert result.argv == ["docker", "pull", "ghcr.io/example/api:main"]

def test_restart_failure_keeps_stderr(docker):
    docker.fail("compose", stderr="compose exploded", code=3)
    result = docker_mod.restart_service("/srv/api/docker-compose.yml", "api")
    assert not result.ok
    assert result.returncode == 3
    assert result.stderr == "compose exploded"

def test_missing_binary(monkeypatch):
    def raise_missing(*args, **kwargs):
        raise FileNotFoundError("docker")
    monkeypatch.setattr(subprocess, "run", raise_missing)
    result = docker_mod.pull_image("r", "api", "main")
    assert result.returncode == 127
    assert not result.ok

def test_timeout(monkeypatch):
    def raise_timeout(argv, **kwargs):
        raise subprocess.TimeoutExpired(argv, kwargs.get("timeout"))
    monkeypatch.setattr(subprocess, "run", raise_timeout)
    result = docker_mod.restart_service("/x/docker-compose.yml", "api", timeout=5)
    assert result.returncode == -1
    assert "timed out after 5s" in result.stderr
