"""Configuration persistence: load and save user preferences."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from paper_shelf.models import (
    ARXIV_API_DEFAULT_MAX_RESULTS,
    ARXIV_API_MAX_RESULTS_LIMIT,
    ARXIV_API_TIMEOUT,
    ARXIV_API_URL,
    ARXIV_API_USER_AGENT,
    ARXIV_PDF_HOST,
    CONFIG_APP_NAME,
    SHELF_FILTERS,
    SORT_OPTIONS,
    TEXT_SIZE_DEFAULT,
    TEXT_SIZE_MAX,
    TEXT_SIZE_MIN,
    LibraryConfig,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration Persistence
# ============================================================================
#
# Validation contract: _dict_to_config() guarantees valid output for any input:
#
#   Field            Rule                          Handler
#   ───────────────  ────────────────────────────  ─────────────────────────
#   max_results      1 ≤ x ≤ 100                   _coerce_max_results
#   timeout_seconds  x ≥ 1                         _dict_to_config
#   default_sort     in SORT_OPTIONS               _parse_choice
#   default_shelf    in SHELF_FILTERS              _parse_choice
#   text_size        12 ≤ x ≤ 24                   _dict_to_config
#   scalar fields    type-checked via _safe_get()  _dict_to_config
#
# Only preferences live here. The paper library itself is never written to disk.
#
CONFIG_FILENAME = "config.json"


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Uses platformdirs for cross-platform config directory:
    - Linux: ~/.config/paper-shelf/config.json
    - macOS: ~/Library/Application Support/paper-shelf/config.json
    - Windows: %APPDATA%/paper-shelf/config.json
    """
    config_dir = Path(user_config_dir(CONFIG_APP_NAME))
    return config_dir / CONFIG_FILENAME


def _config_to_dict(config: LibraryConfig) -> dict[str, Any]:
    """Serialize LibraryConfig to a JSON-compatible dictionary."""
    return {
        "version": config.version,
        "catalog_api_url": config.catalog_api_url,
        "pdf_host": config.pdf_host,
        "max_results": _coerce_max_results(config.max_results),
        "timeout_seconds": config.timeout_seconds,
        "user_agent": config.user_agent,
        "proxy_url": config.proxy_url,
        "default_sort": config.default_sort,
        "default_shelf": config.default_shelf,
        "text_size": config.text_size,
    }


def _safe_get(data: dict, key: str, default: Any, expected_type: type) -> Any:
    """Safely get a value from dict with type validation.

    Returns the default if key is missing or value has wrong type.
    """
    value = data.get(key, default)
    if not isinstance(value, expected_type) or (
        expected_type is int and isinstance(value, bool)
    ):
        return default
    return value


def _coerce_max_results(value: Any) -> int:
    """Validate and clamp the configured max_results for catalog queries."""
    if not isinstance(value, int) or isinstance(value, bool):
        return ARXIV_API_DEFAULT_MAX_RESULTS
    return max(1, min(value, ARXIV_API_MAX_RESULTS_LIMIT))


def _parse_choice(data: dict[str, Any], key: str, choices: Any, default: str) -> str:
    """Read a string that must be one of ``choices``; log and fall back otherwise."""
    value = _safe_get(data, key, default, str)
    if value not in choices:
        logger.warning("Invalid %s %r in config, defaulting to %r", key, value, default)
        return default
    return value


def _dict_to_config(data: dict[str, Any]) -> LibraryConfig:
    """Deserialize a dictionary to LibraryConfig with type validation."""
    timeout = _safe_get(data, "timeout_seconds", ARXIV_API_TIMEOUT, int)
    text_size = _safe_get(data, "text_size", TEXT_SIZE_DEFAULT, int)
    return LibraryConfig(
        catalog_api_url=_safe_get(data, "catalog_api_url", ARXIV_API_URL, str) or ARXIV_API_URL,
        pdf_host=_safe_get(data, "pdf_host", ARXIV_PDF_HOST, str) or ARXIV_PDF_HOST,
        max_results=_coerce_max_results(
            data.get("max_results", ARXIV_API_DEFAULT_MAX_RESULTS)
        ),
        timeout_seconds=timeout if timeout >= 1 else ARXIV_API_TIMEOUT,
        user_agent=_safe_get(data, "user_agent", ARXIV_API_USER_AGENT, str)
        or ARXIV_API_USER_AGENT,
        proxy_url=_safe_get(data, "proxy_url", "", str).strip(),
        default_sort=_parse_choice(data, "default_sort", SORT_OPTIONS, SORT_OPTIONS[0]),
        default_shelf=_parse_choice(data, "default_shelf", SHELF_FILTERS, SHELF_FILTERS[0]),
        text_size=max(TEXT_SIZE_MIN, min(text_size, TEXT_SIZE_MAX)),
        version=_safe_get(data, "version", 1, int),
    )


def load_config(path: Path | None = None) -> LibraryConfig:
    """Load configuration from disk.

    Returns default config if file doesn't exist or is corrupted.
    Logs specific errors to help diagnose config issues.
    """
    config_path = path if path is not None else get_config_path()

    if not config_path.exists():
        return LibraryConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.warning("Config file has invalid JSON, using defaults: %s", e)
        return LibraryConfig()
    except OSError as e:
        logger.warning("Could not read config file, using defaults: %s", e)
        return LibraryConfig()

    if not isinstance(data, dict):
        logger.warning("Config file root is not an object, using defaults")
        return LibraryConfig()
    return _dict_to_config(data)


def save_config(config: LibraryConfig, path: Path | None = None) -> bool:
    """Save configuration to disk atomically.

    Uses write-to-tempfile + os.replace() to prevent partial writes
    on crash/interrupt from corrupting the config file.

    Creates the config directory if it doesn't exist.
    Returns True on success, False on failure.
    """
    config_path = path if path is not None else get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = _config_to_dict(config)
        json_str = json.dumps(data, indent=2, ensure_ascii=False)
        fd, tmp_path = tempfile.mkstemp(dir=config_path.parent, suffix=".tmp", prefix=".config-")
        closed = False
        try:
            os.write(fd, json_str.encode("utf-8"))
            os.close(fd)
            closed = True
            os.replace(tmp_path, config_path)
        except BaseException:
            if not closed:
                os.close(fd)
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        return True
    except OSError as e:
        logger.error("Failed to save config: %s", e)
        return False


__all__ = [
    "CONFIG_APP_NAME",
    "CONFIG_FILENAME",
    "get_config_path",
    "load_config",
    "save_config",
]
