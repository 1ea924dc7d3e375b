from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from chat_markup.constants import MAX_SUGGESTIONS
from chat_markup.exceptions import ConfigError
from chat_markup.types import Config, Theme

logger = logging.getLogger(__name__)

_DEFAULT_TEMPLATE = """\
# chat_markup configuration file

[formatter]
# Nesting depth after which styled bodies are kept as literal text
# max_inline_depth = 16
# Platform message-length ceiling (longer messages are still formatted)
# max_message_length = 4000

[suggestions]
# Maximum number of mention suggestions (1-10)
# limit = 10

[theme]
# Rich style strings, e.g.
# mention_style = "bold bright_blue on grey19"
# spoiler_hidden_style = "grey35 on grey35"
"""


@dataclass
class LoadedConfig:
    """Result of loading .chat_markup/config.toml."""

    config: Config = field(default_factory=Config)
    raw: dict[str, Any] = field(default_factory=dict)


def load_config(path: str = ".chat_markup/config.toml") -> LoadedConfig:
    """Load configuration from a TOML file.

    - Missing file: create default template, return defaults.
    - Malformed TOML or invalid values: log warning, return defaults.
    - Valid TOML: build Config from [formatter], [suggestions] and [theme].

    Never raises an exception.
    """
    config_path = Path(path)

    if not config_path.exists():
        _create_default_template(config_path)
        return LoadedConfig()

    try:
        content = config_path.read_bytes()
    except OSError as e:
        logger.warning("Failed to read config file %s: %s", path, e)
        return LoadedConfig()

    if not content:
        return LoadedConfig()

    try:
        raw = tomllib.loads(content.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        logger.warning("Malformed TOML in %s: %s", path, e)
        return LoadedConfig()

    try:
        config = build_config(raw)
    except ConfigError as e:
        logger.warning("Invalid configuration in %s: %s", path, e)
        return LoadedConfig(raw=raw)

    return LoadedConfig(config=config, raw=raw)


def build_config(raw: dict[str, Any]) -> Config:
    """Build a Config from a parsed TOML mapping. Raises ConfigError on bad values."""
    formatter = _section(raw, "formatter")
    suggestions = _section(raw, "suggestions")
    config = Config(theme=_build_theme(_section(raw, "theme")))

    if "max_inline_depth" in formatter:
        config.max_inline_depth = _positive_int(formatter, "max_inline_depth")
    if "max_message_length" in formatter:
        config.max_message_length = _positive_int(formatter, "max_message_length")
    if "limit" in suggestions:
        limit = _positive_int(suggestions, "limit")
        if limit > MAX_SUGGESTIONS:
            raise ConfigError(f"suggestions.limit must be at most {MAX_SUGGESTIONS}, got {limit}")
        config.suggestion_limit = limit

    return config


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _positive_int(section: dict[str, Any], key: str) -> int:
    value = section[key]
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{key} must be a positive integer, got {value!r}")
    return value


def _build_theme(section: dict[str, Any]) -> Theme:
    theme = Theme()
    known = {f.name for f in fields(Theme)}
    for key, value in section.items():
        if key not in known:
            logger.warning("Ignoring unknown theme key '%s'", key)
            continue
        if key == "heading_styles":
            if (
                not isinstance(value, list)
                or len(value) != 3
                or not all(isinstance(v, str) for v in value)
            ):
                raise ConfigError("theme.heading_styles must be a list of three style strings")
            value = tuple(value)
        elif not isinstance(value, str):
            raise ConfigError(f"theme.{key} must be a style string, got {value!r}")
        setattr(theme, key, value)
    return theme


def _create_default_template(config_path: Path) -> None:
    """Create the default config template, creating parent directories if needed."""
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(_DEFAULT_TEMPLATE, encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to create default config at %s: %s", config_path, e)
