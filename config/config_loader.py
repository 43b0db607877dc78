"""
Configuration loading for Map Studio Ingest.

This module handles loading and validation of the ingest configuration JSON file.

Constants:
    PROJECT_ROOT: Root directory of the project
    CONFIG_DIR: Configuration files directory
    DEFAULT_CONFIG_PATH: Bundled ingest_config.json

Functions:
    load_config: Load and validate ingest configuration from JSON
    load_inference_settings: Inference settings merged with defaults
    load_dimension_defaults: Dimension-settings defaults merged with built-ins
"""

import json
from pathlib import Path
from typing import Dict, Optional

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / 'config'
DEFAULT_CONFIG_PATH = CONFIG_DIR / 'ingest_config.json'


def load_config(config_path: Optional[Path] = None) -> Dict:
    """
    Load ingest configuration from JSON file.

    Reads the ingest_config.json file and validates basic structure.

    Parameters:
    -----------
    config_path : Optional[Path]
        Alternate configuration file. Defaults to config/ingest_config.json

    Returns:
    --------
    Dict
        Configuration dictionary with a 'settings' key

    Raises:
    -------
    FileNotFoundError
        If configuration file doesn't exist
    json.JSONDecodeError
        If configuration file contains invalid JSON
    KeyError
        If required configuration keys are missing
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config = json.load(f)

    if not isinstance(config, dict) or 'settings' not in config:
        raise KeyError("Configuration missing required 'settings' key")

    return config


def load_inference_settings(config: Dict = None) -> Dict:
    """
    Load inference settings from configuration.

    Args:
        config: Configuration dictionary (optional, will load if not provided)

    Returns:
        Dictionary with inference settings

    Defaults:
        - sample_row_limit: 10
        - log_dir: 'logs'
        - console_log_level: 'INFO'
        - file_log_level: 'DEBUG'
    """
    if config is None:
        config = load_config()

    defaults = {
        'sample_row_limit': 10,
        'log_dir': 'logs',
        'console_log_level': 'INFO',
        'file_log_level': 'DEBUG',
    }

    return {**defaults, **config.get('settings', {})}


def load_dimension_defaults(config: Dict = None) -> Dict:
    """
    Load the cosmetic defaults used for fresh dimension settings.

    Args:
        config: Configuration dictionary (optional, will load if not provided)

    Returns:
        Dictionary with palette, colour and symbol size defaults

    Note:
        Returns built-in defaults if 'dimension_defaults' section is missing.
    """
    if config is None:
        config = load_config()

    defaults = {
        'color_palette': 'Blues',
        'color_min_color': '#f7fbff',
        'color_mid_color': '#6baed6',
        'color_max_color': '#08519c',
        'size_min': 5,
        'size_max': 20,
    }

    return {**defaults, **config.get('dimension_defaults', {})}
