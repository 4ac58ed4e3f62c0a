"""
Helper utilities for the Wiktionary search provider.

Provides:
- Settings loading (TOML merged over defaults)
- Opening URLs in the default browser
"""

import copy
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger

SETTINGS_PATH = Path(__file__).parent.parent.parent / "data" / "settings.toml"

DEFAULT_SETTINGS = {
    "wiktionary": {
        "protocol": "https",
        "base_url": "en.wiktionary.org",
        "api_path": "w/api.php",
        "language": "en",
        "limit": 10,
        "timeout": 10,
        "user_agent": "WiktionarySearchProvider (wiktsearch launcher plugin)",
        "marker": "wikt",
        "request_delay_ms": 200,
        "cache_size": 200,
    },
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load provider settings from a TOML file.

    Args:
        path: Settings file, defaults to data/settings.toml

    Returns:
        Dictionary containing settings with defaults applied

    Example settings.toml:
        [wiktionary]
        language = "de"
        limit = 20
    """
    defaults = copy.deepcopy(DEFAULT_SETTINGS)
    settings_path = Path(path) if path else SETTINGS_PATH

    if not settings_path.exists():
        logger.debug(f"Settings file not found at {settings_path}, using defaults")
        return defaults

    try:
        loaded = toml.load(settings_path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning(f"Could not load settings from {settings_path}: {e}. Using defaults")
        return defaults

    return _deep_merge(defaults, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def open_url(url: str) -> bool:
    """
    Open a URL in the default browser via xdg-open.

    Returns:
        True if xdg-open was started
    """
    try:
        subprocess.Popen(
            ["xdg-open", url],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except FileNotFoundError:
        logger.warning("xdg-open not found, cannot open URL")
        return False

    logger.debug(f"Opened {url}")
    return True
