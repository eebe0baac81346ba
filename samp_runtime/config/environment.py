"""
Environment overlay: SAMP_* variables override settings loaded from samp.json / samp.yaml.

- Variable name is SAMP_ + the setting's external name upper-cased (SAMP_PORT, SAMP_RCON_PASSWORD).
- str settings take the raw value; bool/int/float settings are parsed from it.
- Unparsable bool is logged and applied as False; unparsable int/float is logged and the setting keeps its value.
- List settings (gamemodes, filterscripts, plugins) are file-only; a variable for one is logged and ignored.
- A model field of any other type raises UnsupportedFieldTypeError when its field table is built.
"""

import enum
import math
import os
import re
import types
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Mapping

import structlog
from pydantic import BaseModel

from samp_runtime.config.errors import UnsupportedFieldTypeError
from samp_runtime.config.schemas import ServerConfig

logger = structlog.get_logger(__name__)

ENV_PREFIX = "SAMP_"

_TRUE_TOKENS = frozenset({"1", "t", "true"})
_FALSE_TOKENS = frozenset({"0", "f", "false"})
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_HEX_FLOAT_PATTERN = re.compile(r"[+-]?0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)p[+-]?[0-9]+", re.IGNORECASE)
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class FieldKind(enum.Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    FLOAT = "float"
    STRING_LIST = "string_list"
    RECORD_LIST = "record_list"


_SCALAR_KINDS: dict[type, FieldKind] = {
    str: FieldKind.STRING,
    int: FieldKind.INTEGER,
    bool: FieldKind.BOOLEAN,
    float: FieldKind.FLOAT,
}


@dataclass(frozen=True)
class FieldBinding:
    """One settable field: where it lives on the model and which env var feeds it."""

    attribute: str
    external_name: str
    env_var: str
    kind: FieldKind

    @property
    def overridable(self) -> bool:
        return self.kind not in (FieldKind.STRING_LIST, FieldKind.RECORD_LIST)


def env_var_name(external_name: str) -> str:
    return ENV_PREFIX + external_name.upper()


def _classify(annotation: Any) -> FieldKind | None:
    """Map a field annotation to its kind; None if outside the supported set."""
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) != 1:
            return None
        annotation = args[0]
        origin = typing.get_origin(annotation)
    if annotation in _SCALAR_KINDS:
        return _SCALAR_KINDS[annotation]
    if origin is list:
        item_args = typing.get_args(annotation)
        item = item_args[0] if item_args else None
        if item is str:
            return FieldKind.STRING_LIST
        if isinstance(item, type) and issubclass(item, BaseModel):
            return FieldKind.RECORD_LIST
    return None


@lru_cache(maxsize=None)
def field_table(model_cls: type[BaseModel]) -> tuple[FieldBinding, ...]:
    """
    Build the env binding for every declared field of model_cls, in declaration order.

    Private attributes are not model fields, so internal bookkeeping never shows up here.

    Raises:
        UnsupportedFieldTypeError: If a field's type is not one the overlay knows.
    """
    bindings = []
    for attr, info in model_cls.model_fields.items():
        kind = _classify(info.annotation)
        if kind is None:
            raise UnsupportedFieldTypeError(model_cls.__name__, attr, info.annotation)
        external = info.alias or attr
        bindings.append(FieldBinding(attr, external, env_var_name(external), kind))
    return tuple(bindings)


def parse_bool(value: str) -> bool:
    """Lenient bool: 1/t/true and 0/f/false, any case. Raises ValueError otherwise."""
    token = value.lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ValueError(f"invalid syntax for boolean: {value!r}")


def parse_int(value: str) -> int:
    """Base-10 signed 64-bit integer; no surrounding whitespace or digit separators."""
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"invalid syntax for integer: {value!r}")
    result = int(value)
    if not _INT64_MIN <= result <= _INT64_MAX:
        raise ValueError(f"value out of range for integer: {value!r}")
    return result


def parse_float(value: str) -> float:
    """
    Decimal float, hex float with a binary exponent (0x1p4), or inf/nan.

    Values too large for a 64-bit float are rejected.
    """
    if _HEX_FLOAT_PATTERN.fullmatch(value):
        try:
            return float.fromhex(value)
        except OverflowError as e:
            raise ValueError(f"value out of range for float: {value!r}") from e
    if not _FLOAT_PATTERN.fullmatch(value):
        raise ValueError(f"invalid syntax for float: {value!r}")
    result = float(value)
    if math.isinf(result) and "inf" not in value.lower():
        raise ValueError(f"value out of range for float: {value!r}")
    return result


def _set_string(config: BaseModel, binding: FieldBinding, value: str) -> None:
    setattr(config, binding.attribute, value)


def _set_bool(config: BaseModel, binding: FieldBinding, value: str) -> None:
    try:
        parsed = parse_bool(value)
    except ValueError as e:
        logger.warning(
            "env_override_invalid",
            variable=binding.env_var,
            setting=binding.external_name,
            value=value,
            expected="boolean",
            error=str(e),
            applied=False,
        )
        parsed = False
    setattr(config, binding.attribute, parsed)


def _set_number(parser: Callable[[str], Any], expected: str) -> Callable[[BaseModel, FieldBinding, str], None]:
    def setter(config: BaseModel, binding: FieldBinding, value: str) -> None:
        try:
            parsed = parser(value)
        except ValueError as e:
            logger.warning(
                "env_override_invalid",
                variable=binding.env_var,
                setting=binding.external_name,
                value=value,
                expected=expected,
                error=str(e),
            )
            return
        setattr(config, binding.attribute, parsed)

    return setter


def _set_unsupported(config: BaseModel, binding: FieldBinding, value: str) -> None:
    # TODO: split comma-separated values for gamemodes/filterscripts/plugins
    logger.info(
        "env_override_unsupported",
        variable=binding.env_var,
        setting=binding.external_name,
        reason="list settings cannot be set via environment variables yet",
    )


_SETTERS: dict[FieldKind, Callable[[BaseModel, FieldBinding, str], None]] = {
    FieldKind.STRING: _set_string,
    FieldKind.BOOLEAN: _set_bool,
    FieldKind.INTEGER: _set_number(parse_int, "integer"),
    FieldKind.FLOAT: _set_number(parse_float, "float"),
    FieldKind.STRING_LIST: _set_unsupported,
    FieldKind.RECORD_LIST: _set_unsupported,
}

# Fail on import if ServerConfig ever declares a field the overlay cannot handle
SERVER_CONFIG_FIELDS = field_table(ServerConfig)


def apply_environment_overrides(config: BaseModel, environ: Mapping[str, str] | None = None) -> BaseModel:
    """
    Override settings on config from SAMP_* variables, in place.

    Args:
        config: Loaded config (ServerConfig or another model built from the same field types).
        environ: Variables to read (default: os.environ).

    Returns:
        The same config object, for chaining.
    """
    env = os.environ if environ is None else environ
    for binding in field_table(type(config)):
        value = env.get(binding.env_var)
        if value is None:
            continue
        _SETTERS[binding.kind](config, binding, value)
    return config
