import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from config import (
    Config,
    apply_dict_to_dataclass,
    migrate_config,
)


def get_config_dir() -> Path:
    """~/.mandalarotate, created on first use."""
    config_dir = Path.home() / '.mandalarotate'
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file() -> Path:
    return get_config_dir() / 'config.json'


def save_config(config: Config, path: Optional[Path] = None) -> bool:
    """Save config to JSON (default location unless path is given)."""
    try:
        config_file = Path(path) if path is not None else get_config_file()
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(asdict(config), f, indent=2)
        print(f"[Config] Saved to {config_file}")
        return True
    except OSError as e:
        print(f"[Config] Failed to save: {e}")
        return False


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load config from JSON, returns defaults if the file is missing or unreadable.

    Older or partially invalid files are migrated and written back to the
    same path.
    """
    try:
        config_file = Path(path) if path is not None else get_config_file()
        if not config_file.exists():
            print(f"[Config] No config at {config_file}, using defaults")
            return Config()

        with open(config_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("top-level JSON value must be an object")

        config = Config()
        apply_dict_to_dataclass(config, data)
        loaded_version = data.get('version')
        migrate_config(config, loaded_version)

        print(f"[Config] Loaded from {config_file} (version={config.version})")

        if loaded_version != config.version:
            save_config(config, config_file)
        return config
    except (OSError, ValueError) as e:
        print(f"[Config] Failed to load: {e}, using defaults")
        return Config()
