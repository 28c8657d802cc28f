"""Pre-DB bootstrap configuration. Zero imports from the rest of the app.

Stores user preferences that must be known before opening the DB (e.g. data_folder).
Config lives in ~/.monivera/config.json to avoid a bootstrapping problem.
"""
import json
import os
from pathlib import Path

CONFIG_DIR = Path.home() / ".monivera"
CONFIG_FILE = CONFIG_DIR / "config.json"


def load_config() -> dict:
    """Returns {} on missing or corrupt file. Never raises."""
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict) -> None:
    """Creates ~/.monivera/ if needed; atomic write via .tmp + os.replace()."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    tmp = CONFIG_FILE.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, CONFIG_FILE)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def get_data_folder() -> str | None:
    """Return config["data_folder"] or None if not set."""
    return load_config().get("data_folder")


def set_data_folder(path: str | None) -> None:
    """Update data_folder in config and save."""
    config = load_config()
    if path is None:
        config.pop("data_folder", None)
    else:
        config["data_folder"] = path
    save_config(config)
