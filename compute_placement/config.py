"""Configuration management for compute-placement.

Values are resolved through a fallback chain: environment variable, then the
options object handed over by the provisioning workflow, then the
``[placement]`` section of the config file, then the built-in default.
"""

from __future__ import annotations

import configparser
import logging
import os
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "COMPUTE_PLACEMENT_CONFIG"
CONFIG_SECTION = "placement"

_file_values: Optional[Dict[str, str]] = None
_options: Optional[Any] = None


def initialize(options: Any) -> None:
    """Attach the provisioning workflow's options object.

    Placement settings are read from its ``placement_<key>`` attributes,
    e.g. ``options.placement_fast_image``.
    """
    global _options
    _options = options
    logger.debug("Placement config bound to workflow options")


def _parse_config_file(config_file: Optional[str] = None) -> Dict[str, Any]:
    """Parse the ``[placement]`` section of an ini-style config file.

    Args:
        config_file: Path to config file. If None or missing, nothing is read.

    Returns:
        Dict of raw string values from the section (empty if unavailable)
    """
    if not config_file:
        return {}

    parser = configparser.ConfigParser()
    try:
        read = parser.read(config_file)
    except configparser.Error as exc:
        logger.warning("Failed to parse config file %s: %s", config_file, exc)
        return {}

    if not read:
        logger.debug("Config file %s not found, using defaults", config_file)
        return {}
    if not parser.has_section(CONFIG_SECTION):
        logger.debug("Config file %s has no [%s] section", config_file, CONFIG_SECTION)
        return {}
    return dict(parser.items(CONFIG_SECTION))


def _file_settings() -> Dict[str, str]:
    """Values of the config file named by COMPUTE_PLACEMENT_CONFIG, read once."""
    global _file_values
    if _file_values is None:
        _file_values = _parse_config_file(os.environ.get(CONFIG_ENV_VAR))
    return _file_values


def _convert(
    source: str, raw: Any, default: Any, converter: Optional[Callable[[Any], Any]]
) -> Any:
    if converter is None or not isinstance(raw, str):
        return raw
    try:
        return converter(raw)
    except (ValueError, TypeError):
        logger.warning("Ignoring bad %s value %r, using %r", source, raw, default)
        return default


def _get_config_value(
    key: str,
    default: Any,
    env_var: Optional[str] = None,
    converter: Optional[Callable[[Any], Any]] = None,
) -> Any:
    """Look up `key`; the first source that has it wins.

    Order: `env_var`, the workflow options object, the ``[placement]``
    file section, then `default`. String values pass through `converter`.
    """
    if env_var and env_var in os.environ:
        return _convert(env_var, os.environ[env_var], default, converter)

    option_key = f"placement_{key}"
    if _options is not None and hasattr(_options, option_key):
        return _convert(option_key, getattr(_options, option_key), default, converter)

    if key in _file_settings():
        return _convert(key, _file_settings()[key], default, converter)

    return default


def parse_flag(value: Any) -> bool:
    """Parse a string-encoded workflow flag.

    Only ``True`` or the token "true" (any case, surrounding whitespace
    ignored) count as set; every other value is False.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def fast_image_enabled() -> bool:
    """Select pre-baked fast images by name pattern (default: off)."""
    return _get_config_value(
        "fast_image",
        False,
        env_var="COMPUTE_PLACEMENT_FAST_IMAGE",
        converter=parse_flag,
    )


def testing_mode() -> bool:
    """Restrict fast image selection to snapshot builds."""
    return _get_config_value(
        "testing_mode",
        False,
        env_var="COMPUTE_PLACEMENT_TESTING_MODE",
        converter=parse_flag,
    )


def image_name_prefix() -> str:
    """Namespace prefix of published fast image names (default: "wmlabs")."""
    return _get_config_value(
        "image_name_prefix",
        "wmlabs",
        env_var="COMPUTE_PLACEMENT_IMAGE_NAME_PREFIX",
    )


def catalog_timeout() -> int:
    """Network catalog API timeout in seconds (default: 30)."""
    return _get_config_value(
        "catalog_timeout",
        30,
        env_var="COMPUTE_PLACEMENT_CATALOG_TIMEOUT",
        converter=int,
    )


def catalog_interface() -> str:
    """Endpoint interface used for catalog queries: 'public' | 'internal' | 'admin'."""
    value = _get_config_value(
        "catalog_interface",
        "public",
        env_var="COMPUTE_PLACEMENT_CATALOG_INTERFACE",
    )
    if value not in ("public", "internal", "admin"):
        logger.warning("Invalid catalog_interface %s, using default: public", value)
        return "public"
    return value


def reset_config() -> None:
    """Forget cached file values and the bound workflow options."""
    global _file_values, _options
    _file_values = None
    _options = None
