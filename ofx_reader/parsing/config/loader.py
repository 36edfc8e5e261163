"""
Settings Loader

Reads ParserSettings overrides from JSON configuration files.
"""
import os
import json
from .settings import ParserSettings, DEFAULT_SETTINGS
from ofx_reader.common.logging_config import get_logger

logger = get_logger(__name__)


def load_settings(path: str) -> ParserSettings:
    """
    Load parser settings from a JSON file.

    Args:
        path: Path to a JSON object with any subset of ParserSettings fields

    Returns:
        ParserSettings, or the defaults if the file does not exist
    """
    if not os.path.exists(path):
        logger.warning(f"Settings file not found: {path}", path=path)
        return DEFAULT_SETTINGS

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a JSON object: {path}")

    settings = ParserSettings.from_dict(data)
    logger.debug(f"Loaded settings from {path}", keys=sorted(data))
    return settings
