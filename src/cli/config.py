"""Configuration loading and management."""

import os
from pathlib import Path
from typing import Optional

import yaml

from .config_models import MoodlogConfig

# Default config dict
DEFAULT_CONFIG = MoodlogConfig().to_dict()

CONFIG_ENV_VAR = "MOODLOG_CONFIG"


def find_config() -> Optional[Path]:
    """Find config file: $MOODLOG_CONFIG, then standard locations."""
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".moodlog" / "config.yaml",
        Path.home() / "moodlog" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration as a plain dict. Use load_config_model() for typed access."""
    return load_config_model(config_path).to_dict()


def load_config_model(config_path: Optional[Path] = None) -> MoodlogConfig:
    """Load configuration as Pydantic model with validation.

    Raises:
        ValueError: Invalid YAML or invalid values
    """
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    if not isinstance(base_config, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    try:
        return MoodlogConfig.from_dict(base_config)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")


def get_paths(config: dict) -> dict:
    """Get expanded paths from config dict."""
    paths = config.get("paths") or DEFAULT_CONFIG["paths"]
    model = MoodlogConfig.from_dict({"paths": paths}).paths
    return {
        "data_dir": model.data_dir,
        "entries_db": model.entries_db,
        "users_db": model.users_db,
        "markdown_dir": model.markdown_dir,
        "session_file": model.session_file,
        "log_file": model.log_file,
    }
