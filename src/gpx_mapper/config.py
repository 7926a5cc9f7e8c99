"""User configuration for gpx-mapper.

Config is read from two JSON files and merged:
1. ~/.config/gpx-mapper/gpx-mapper.json (global, loaded first)
2. ./gpx-mapper.json (local, overrides global)

Recognized keys: "title", "map_style", "port".
"""

import json
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "gpx-mapper"
CONFIG_PATH = CONFIG_DIR / "gpx-mapper.json"
LOCAL_CONFIG_PATH = Path("gpx-mapper.json")


def load_config() -> dict:
    """Load and merge the global and local config files.

    Unreadable or malformed files are skipped.

    Returns:
        Dict with merged config values, empty dict if no files exist.
    """
    config = {}
    for config_path in [CONFIG_PATH, LOCAL_CONFIG_PATH]:
        if config_path.exists():
            try:
                with config_path.open() as f:
                    data = json.load(f)
            except (json.JSONDecodeError, OSError):
                continue
            if isinstance(data, dict):
                config.update(data)
    return config
