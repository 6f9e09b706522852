"""Rendering and parsing configuration.

Values mirror the settings of the editor extension this server backs:

    column_spacing         Minimum number of spaces between columns (2)
    default_return_tag     Whether or not to display a return tag (true)
    comment_style          "default" or "drupal" ("default")
    php_mixed_union_types  Render nullable PHP types as "mixed" (false)
    comments.<language>    Comment delimiter overrides (open, separator, close)

A missing or invalid value never raises; the documented default is used
instead and a warning is logged.
"""

import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import structlog

if TYPE_CHECKING:
    from .parser.languages import CommentStyle, Grammar

logger = structlog.get_logger()

CONFIG_ENV_VAR = "DOCBLOCKR_CONFIG"
CONFIG_FILENAME = "docblockr.toml"

COMMENT_STYLES = ("default", "drupal")
COMMENT_OVERRIDE_KEYS = ("open", "separator", "close")


@dataclass(frozen=True)
class Config:
    """Read-only settings consumed by parsers and the renderer."""
    column_spacing: int = 2
    default_return_tag: bool = True
    comment_style: str = "default"
    php_mixed_union_types: bool = False
    # Maps grammar name -> {"open": ..., "separator": ..., "close": ...}
    comments: dict[str, dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "Config":
        """Build a config from a plain mapping, falling back per key."""
        defaults = cls()
        values: dict[str, Any] = {}

        spacing = data.get("column_spacing", defaults.column_spacing)
        if isinstance(spacing, int) and not isinstance(spacing, bool) and spacing >= 0:
            values["column_spacing"] = spacing
        else:
            _invalid("column_spacing", spacing)

        for key in ("default_return_tag", "php_mixed_union_types"):
            value = data.get(key, getattr(defaults, key))
            if isinstance(value, bool):
                values[key] = value
            else:
                _invalid(key, value)

        style = data.get("comment_style", defaults.comment_style)
        if style in COMMENT_STYLES:
            values["comment_style"] = style
        else:
            _invalid("comment_style", style)

        values["comments"] = _read_comment_overrides(data.get("comments", {}))

        return cls(**values)

    def comment_style_for(self, grammar: "Grammar") -> "CommentStyle":
        """Apply any delimiter overrides configured for this grammar."""
        overrides = self.comments.get(grammar.name)
        if not overrides:
            return grammar.comment
        return replace(grammar.comment, **overrides)


def _invalid(key: str, value: Any):
    logger.warning("config.invalid_value", key=key, value=value)


def _read_comment_overrides(raw: Any) -> dict[str, dict[str, str]]:
    if not isinstance(raw, dict):
        _invalid("comments", raw)
        return {}

    result = {}
    for language, entry in raw.items():
        if not isinstance(entry, dict):
            _invalid(f"comments.{language}", entry)
            continue
        overrides = {}
        for key, value in entry.items():
            if key in COMMENT_OVERRIDE_KEYS and isinstance(value, str):
                overrides[key] = value
            else:
                _invalid(f"comments.{language}.{key}", value)
        if overrides:
            result[language] = overrides
    return result


def find_config_file(path: Optional[str] = None) -> Optional[Path]:
    """Locate the config file: explicit path, env var, then working directory."""
    if path:
        return Path(path).expanduser()

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    local = Path.cwd() / CONFIG_FILENAME
    if local.is_file():
        return local
    return None


def load_config(path: Optional[str] = None) -> Config:
    """Load configuration from TOML, returning defaults when unavailable."""
    config_path = find_config_file(path)
    if config_path is None:
        return Config()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        logger.warning("config.not_found", path=str(config_path))
        return Config()
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("config.unreadable", path=str(config_path), error=str(e))
        return Config()

    logger.debug("config.loaded", path=str(config_path))
    return Config.from_mapping(data)
