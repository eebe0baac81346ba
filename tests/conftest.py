"""Pytest fixtures: settings directories, clean SAMP_* environment, structlog reset."""

import json
import os

import pytest
import structlog

SAMPLE_SETTINGS = {
    "gamemodes": ["rivershell", "baseaf"],
    "filterscripts": ["admin"],
    "plugins": ["streamer", {"name": "mysql"}],
    "rcon_password": "changeme",
    "port": 7777,
    "hostname": "Test Server",
    "maxplayers": 32,
    "announce": True,
    "stream_distance": 300.5,
}

SAMPLE_YAML = """
gamemodes:
  - grandlarc
rcon_password: yamlpass
port: 8888
hostname: YAML Server
maxplayers: 64
lanmode: true
stream_distance: 150.0
"""


@pytest.fixture(autouse=True)
def clean_samp_env(monkeypatch):
    """Drop SAMP_* and CONFIG_DIR so the caller's shell cannot leak into tests."""
    for name in list(os.environ):
        if name.startswith("SAMP_") or name == "CONFIG_DIR":
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_structlog():
    """The CLI reconfigures structlog; restore defaults after every test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def json_config_dir(tmp_path):
    """Temporary server dir with samp.json only."""
    (tmp_path / "samp.json").write_text(json.dumps(SAMPLE_SETTINGS), encoding="utf-8")
    return tmp_path


@pytest.fixture
def yaml_config_dir(tmp_path):
    """Temporary server dir with samp.yaml only."""
    (tmp_path / "samp.yaml").write_text(SAMPLE_YAML, encoding="utf-8")
    return tmp_path
