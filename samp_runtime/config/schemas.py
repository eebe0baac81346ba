"""Pydantic schemas for samp.json / samp.yaml."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, PrivateAttr, model_validator

ECHO_MESSAGE = "loading server.cfg generated by sampctl - do not edit this file manually, edit samp.json instead!"


def setting(
    server_default: str | None = None,
    *,
    alias: str | None = None,
    required: bool = False,
    description: str | None = None,
) -> Any:
    """Optional setting: absent (None) until a file or env var provides it.

    server_default is the value server.cfg falls back to when the setting is absent; it is
    never applied while loading.
    """
    return Field(
        None,
        alias=alias,
        description=description,
        json_schema_extra={"server_default": server_default, "required": required},
    )


class Plugin(BaseModel):
    """One plugin entry; a bare string in the document is taken as the plugin name."""

    name: str = Field(..., description="Plugin name or dependency string")

    @model_validator(mode="before")
    @classmethod
    def coerce_plain_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data


class ServerConfig(BaseModel):
    """Server settings loaded from samp.json or samp.yaml, then overridden by SAMP_* env vars."""

    # Documents are keyed by external name only and values must already have the declared type
    # (no "7777" for an int, no 1 for a bool); ints are still accepted for float settings.
    model_config = {"extra": "ignore", "strict": True}

    # Internal only: never serialized, never overridden from the environment
    _directory: str | None = PrivateAttr(default=None)
    _echo: str = PrivateAttr(default=ECHO_MESSAGE)

    # Used by sampctl itself, not written to server.cfg
    version: str | None = setting(description="SA:MP server binaries version")
    endpoint: str | None = setting(description="Download endpoint for server binaries")

    # Core properties
    gamemodes: list[str] | None = setting(description="Gamemode names; written as gamemode0, gamemode1, ...")
    filterscripts: list[str] | None = setting()
    plugins: list[Plugin] | None = setting()
    rcon_password: str | None = setting(required=True)
    port: int | None = setting("8192")
    hostname: str | None = setting("SA-MP Server")
    max_players: int | None = setting("50", alias="maxplayers")
    language: str | None = setting("-")
    map_name: str | None = setting("San Andreas", alias="mapname")
    web_url: str | None = setting("www.sa-mp.com", alias="weburl")
    gamemode_text: str | None = setting("Unknown", alias="gamemodetext")

    # Network and technical config
    bind: str | None = setting()
    password: str | None = setting()
    announce: bool | None = setting("1")
    lan_mode: bool | None = setting("0", alias="lanmode")
    query: bool | None = setting("1")
    rcon: bool | None = setting("0")
    log_queries: bool | None = setting("0", alias="logqueries")
    sleep: int | None = setting("5")
    max_npc: int | None = setting("0", alias="maxnpc")

    # Rates and performance
    stream_rate: int | None = setting("1000")
    stream_distance: float | None = setting("200.0")
    onfoot_rate: int | None = setting("30")
    incar_rate: int | None = setting("30")
    weapon_rate: int | None = setting("30")
    chat_logging: bool | None = setting("1", alias="chatlogging")
    timestamp: bool | None = setting("1")
    no_sign: str | None = setting(alias="nosign")
    log_time_format: str | None = setting("[%H:%M:%S]", alias="logtimeformat")
    message_hole_limit: int | None = setting("3000", alias="messageholelimit")
    messages_limit: int | None = setting("500", alias="messageslimit")
    acks_limit: int | None = setting("3000", alias="ackslimit")
    player_timeout: int | None = setting("10000", alias="playertimeout")
    min_connection_time: int | None = setting("0", alias="minconnectiontime")
    lag_comp_mode: int | None = setting("1", alias="lagcompmode")
    connseed_time: int | None = setting("300000", alias="connseedtime")
    db_logging: bool | None = setting("0")
    db_log_queries: bool | None = setting("0")
    connect_cookies: bool | None = setting("1", alias="conncookies")
    cookie_logging: bool | None = setting("0", alias="cookielogging")
    output: bool | None = setting("1")

    @property
    def directory(self) -> str | None:
        """Directory this config was loaded from (None when built in memory)."""
        return self._directory

    def set_directory(self, directory: str | None) -> None:
        self._directory = directory

    @property
    def echo(self) -> str:
        return self._echo

    @classmethod
    def attribute_name(cls, name: str) -> str:
        """Resolve an attribute or external name to the attribute name."""
        if name in cls.model_fields:
            return name
        for attr, info in cls.model_fields.items():
            if info.alias == name:
                return attr
        raise KeyError(f"unknown setting: {name}")

    @classmethod
    def external_name(cls, name: str) -> str:
        """Name used in samp.json / samp.yaml (and, upper-cased, in SAMP_* env vars)."""
        attr = cls.attribute_name(name)
        return cls.model_fields[attr].alias or attr

    @classmethod
    def setting_extra(cls, name: str) -> dict[str, Any]:
        extra = cls.model_fields[cls.attribute_name(name)].json_schema_extra
        return extra if isinstance(extra, dict) else {}

    @classmethod
    def server_default(cls, name: str) -> str | None:
        """Documented server.cfg default for a setting, or None when it has none."""
        return cls.setting_extra(name).get("server_default")

    @classmethod
    def required_settings(cls) -> list[str]:
        return [cls.external_name(attr) for attr in cls.model_fields if cls.setting_extra(attr).get("required")]

    def missing_required(self) -> list[str]:
        """External names of required settings that are absent. Reports only; never raises."""
        return [name for name in self.required_settings() if getattr(self, self.attribute_name(name)) is None]

    def to_document(self) -> dict[str, Any]:
        """Serializable mapping keyed by external name; absent settings are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
