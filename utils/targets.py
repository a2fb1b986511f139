"""
Target Apps Loader

Loads the list of applications to crawl from a JSON file.

Expected structure (both keys optional, unknown keys ignored):

    {
        "app_store":  [{"app_id": "1194408342", "country": "us"}],
        "play_store": [{"app_id": "com.weather.app", "country": "kr", "pages": 1}]
    }
"""

import logging
from pathlib import Path
from typing import Any

import orjson
from pydantic import ValidationError

from utils.errors import ConfigLoadError
from utils.schemas import TargetApps

logger = logging.getLogger(__name__)


def parse_target_apps(content: bytes | str) -> TargetApps:
    """
    Parse target apps from raw JSON content.

    Args:
        content: JSON document

    Returns:
        Frozen TargetApps snapshot

    Raises:
        ConfigLoadError: If content is not valid JSON or not the expected structure
    """
    try:
        raw: Any = orjson.loads(content)
    except orjson.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigLoadError(f"Expected a JSON object, got {type(raw).__name__}")

    # An explicit null behaves like a missing key
    raw = {key: value for key, value in raw.items() if value is not None}

    try:
        return TargetApps(**raw)
    except ValidationError as e:
        raise ConfigLoadError(str(e).split("\n")[0]) from e


def load_target_apps(path: str) -> TargetApps:
    """
    Load target apps from a JSON file.

    Args:
        path: Path to the target apps JSON file

    Returns:
        Frozen TargetApps snapshot

    Raises:
        ConfigLoadError: If the file is missing, unreadable or malformed
    """
    config_path = Path(path)

    if not config_path.is_file():
        error_msg = f"Target apps file not found: {path}"
        logger.error(error_msg)
        raise ConfigLoadError(error_msg)

    try:
        content = config_path.read_bytes()
    except OSError as e:
        error_msg = f"Failed to read target apps file: {path} - {e}"
        logger.error(error_msg)
        raise ConfigLoadError(error_msg) from e

    targets = parse_target_apps(content)

    logger.info(
        "Target apps loaded: app_store=%d, play_store=%d, path=%s",
        len(targets.app_store),
        len(targets.play_store),
        path,
    )
    return targets
