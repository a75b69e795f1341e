"""Declarative custom entries.

Custom methods, headers and MIME types can be declared in YAML (or an
equivalent dict) instead of calling ``extend`` by hand:

    dict/YAML → parse_extensions_config() → ExtensionsConfig
              → apply_extensions_config() → facade.extend()

Example YAML::

    methods:
      - method: LINK
        groups: [idempotent]
    headers:
      - name: X-Request-Id
    mime:
      - type: custom/json
        group: CUSTOM
        extension: .json

Statuses are built-in only and have no section.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from httpconv._errors import HTTPConvenienceError

if TYPE_CHECKING:
    from httpconv._headers import Headers
    from httpconv._methods import Methods
    from httpconv._mime import MIMETypes

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ExtensionsConfig:
    """Custom rows per domain, ready for ``extend``.

    A domain left as None is not touched by apply_extensions_config();
    an empty tuple installs an empty custom layer.
    """

    methods: tuple[tuple[str, tuple[str, ...]], ...] | None = None
    headers: tuple[tuple[str], ...] | None = None
    mime: tuple[tuple[str, str, str], ...] | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

_SECTIONS = frozenset({"methods", "headers", "mime"})


class ConfigParseError(HTTPConvenienceError):
    """Error parsing a config dict into config types."""


def parse_extensions_config(data: dict[str, Any]) -> ExtensionsConfig:
    """Parse a dict into an ExtensionsConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = set(data) - _SECTIONS
    if unknown:
        msg = f"unknown sections {sorted(map(str, unknown))}, expected some of {sorted(_SECTIONS)}"
        raise ConfigParseError(msg)

    methods = None
    if "methods" in data:
        methods = tuple(_parse_method(m) for m in _section(data, "methods"))

    headers = None
    if "headers" in data:
        headers = tuple(_parse_header(h) for h in _section(data, "headers"))

    mime = None
    if "mime" in data:
        mime = tuple(_parse_mime(m) for m in _section(data, "mime"))

    return ExtensionsConfig(methods=methods, headers=headers, mime=mime)


def load_extensions_config(path: str | Path) -> ExtensionsConfig:
    """Read and parse a YAML extensions file. An empty file configures nothing.

    Raises:
        ConfigParseError: If the file is not valid YAML or is malformed.
    """
    path = Path(path)
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"{path} is not valid YAML"
        raise ConfigParseError(msg, e) from e
    if data is None:
        return ExtensionsConfig()
    return parse_extensions_config(data)


def _section(data: dict[str, Any], name: str) -> list[Any]:
    items = data[name]
    if items is None:
        return []
    if not isinstance(items, list):
        msg = f"'{name}' must be a list, got {type(items).__name__}"
        raise ConfigParseError(msg)
    return items


def _string_field(data: dict[str, Any], section: str, name: str) -> str:
    if name not in data:
        msg = f"{section} entry missing required field '{name}'"
        raise ConfigParseError(msg)
    value = data[name]
    if not isinstance(value, str) or not value:
        msg = f"{section} {name} must be a non-empty string, got {value!r}"
        raise ConfigParseError(msg)
    return value


def _entry_dict(data: Any, section: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        msg = f"{section} entry must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)
    return data


def _parse_method(data: Any) -> tuple[str, tuple[str, ...]]:
    """Parse a methods entry: ``{method, groups}``. ``groups`` may be one string."""
    data = _entry_dict(data, "methods")
    method = _string_field(data, "methods", "method")

    groups = data.get("groups", [])
    if isinstance(groups, str):
        groups = [groups]
    if not isinstance(groups, list) or not all(isinstance(g, str) for g in groups):
        msg = f"groups of method {method!r} must be a list of strings, got {groups!r}"
        raise ConfigParseError(msg)
    return method, tuple(groups)


def _parse_header(data: Any) -> tuple[str]:
    """Parse a headers entry: ``{name}`` or a bare string."""
    if isinstance(data, str) and data:
        return (data,)
    data = _entry_dict(data, "headers")
    return (_string_field(data, "headers", "name"),)


def _parse_mime(data: Any) -> tuple[str, str, str]:
    """Parse a mime entry: ``{type, group, extension}``."""
    data = _entry_dict(data, "mime")
    return (
        _string_field(data, "mime", "type"),
        _string_field(data, "mime", "group"),
        _string_field(data, "mime", "extension"),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Applying
# ═══════════════════════════════════════════════════════════════════════════════


def apply_extensions_config(
    config: ExtensionsConfig,
    *,
    methods: Methods | None = None,
    headers: Headers | None = None,
    mime_types: MIMETypes | None = None,
) -> None:
    """Extend each given facade with its section of ``config``.

    A facade that is not passed, or whose section is absent, is left as it
    is. Each extend replaces that facade's previous custom layer.
    """
    if methods is not None and config.methods is not None:
        methods.extend(list(config.methods))
        logger.debug("applied %d custom methods from config", len(config.methods))
    if headers is not None and config.headers is not None:
        headers.extend(list(config.headers))
        logger.debug("applied %d custom headers from config", len(config.headers))
    if mime_types is not None and config.mime is not None:
        mime_types.extend(list(config.mime))
        logger.debug("applied %d custom MIME types from config", len(config.mime))
