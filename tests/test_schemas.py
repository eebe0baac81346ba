"""Tests for ServerConfig metadata helpers and serialization."""

import pytest

from samp_runtime.config.schemas import ECHO_MESSAGE, Plugin, ServerConfig


def test_all_settings_default_absent():
    cfg = ServerConfig()
    assert cfg.port is None
    assert cfg.gamemodes is None
    assert cfg.to_document() == {}


def test_validate_by_external_name_only():
    """Attribute names are not document keys; only the external name sets a setting."""
    assert ServerConfig.model_validate({"maxplayers": 10}).max_players == 10
    cfg = ServerConfig.model_validate({"max_players": 10, "map_name": "X"})
    assert cfg.max_players is None
    assert cfg.map_name is None
    assert cfg.to_document() == {}


def test_external_name():
    assert ServerConfig.external_name("max_players") == "maxplayers"
    assert ServerConfig.external_name("maxplayers") == "maxplayers"
    assert ServerConfig.external_name("port") == "port"
    with pytest.raises(KeyError):
        ServerConfig.external_name("no_such_setting")


def test_server_defaults():
    assert ServerConfig.server_default("port") == "8192"
    assert ServerConfig.server_default("max_players") == "50"
    assert ServerConfig.server_default("logtimeformat") == "[%H:%M:%S]"
    assert ServerConfig.server_default("bind") is None


def test_missing_required_reports_without_raising():
    assert ServerConfig.required_settings() == ["rcon_password"]
    assert ServerConfig().missing_required() == ["rcon_password"]
    assert ServerConfig(rcon_password="x").missing_required() == []


def test_internal_fields_not_serialized():
    cfg = ServerConfig(port=7777)
    cfg.set_directory("/srv/samp")
    assert cfg.directory == "/srv/samp"
    assert cfg.echo == ECHO_MESSAGE
    dumped = cfg.model_dump()
    assert "directory" not in dumped and "_directory" not in dumped
    assert "echo" not in dumped and "_echo" not in dumped
    assert cfg.to_document() == {"port": 7777}


def test_plugin_accepts_plain_string():
    cfg = ServerConfig.model_validate({"plugins": ["streamer", {"name": "mysql"}]})
    assert cfg.plugins == [Plugin(name="streamer"), Plugin(name="mysql")]
    assert cfg.to_document()["plugins"] == [{"name": "streamer"}, {"name": "mysql"}]
