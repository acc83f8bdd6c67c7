"""Root pytest configuration."""
import pytest
import os
from pathlib import Path

import yaml


ENV_VARS = (
    "CONFIG_PATH",
    "CONFIG_BOOTSTRAP_PATH",
    "ACTIVE_PROFILES",
    "LOG_LEVEL",
    "APPLICATION_JSON",
    "SPRING_CONFIG_BOOTSTRAP_FILE",
    "SPRING_CONFIG_ENDPOINT",
    "SPRING_CONFIG_AUTH_USER",
    "SPRING_CONFIG_AUTH_PASS",
)


def pytest_configure(config):
    """Configure pytest to handle integration test markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (requires a config server)"
    )


def pytest_runtest_setup(item):
    """Skip integration tests if not enabled."""
    if item.get_closest_marker("integration"):
        if not os.getenv("RUN_INTEGRATION_TESTS"):
            pytest.skip(
                "Integration tests skipped. Set RUN_INTEGRATION_TESTS=1 to run."
            )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep loader environment variables from leaking into tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_yaml(tmp_path):
    """Write YAML files into a temporary config directory.

    Example:
        path = write_yaml("application.yml", {"key": "value"})
        path = write_yaml("application.yml", [{"a": 1}, {"profiles": "dev", "a": 2}])
        path = write_yaml("broken.yml", "key: [unclosed")
    """
    def _write(name, content, directory=None) -> Path:
        target_dir = Path(directory) if directory is not None else tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name

        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        elif isinstance(content, list):
            path.write_text(yaml.safe_dump_all(content, sort_keys=False), encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(content, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_dir(tmp_path):
    """Temporary directory used as CONFIG_PATH."""
    return tmp_path
