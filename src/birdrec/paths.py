"""Cross-platform path resolution for birdrec data and cache directories."""

import os
from pathlib import Path

from platformdirs import user_cache_dir, user_data_dir

from birdrec.constants import APP_NAME


def get_data_dir(config_override: str = "") -> Path:
    """Resolve the birdrec data directory.

    Priority: config_override > BIRDREC_DATA_DIR env var > platform default.
    """
    if config_override:
        return Path(config_override)

    env_dir = os.environ.get("BIRDREC_DATA_DIR")
    if env_dir:
        return Path(env_dir)

    return Path(user_data_dir(APP_NAME))


def get_cache_dir(config_override: str = "") -> Path:
    """Resolve the app-private cache directory that holds temp recordings.

    Priority: config_override > BIRDREC_CACHE_DIR env var > platform default.
    """
    if config_override:
        return Path(config_override)

    env_dir = os.environ.get("BIRDREC_CACHE_DIR")
    if env_dir:
        return Path(env_dir)

    return Path(user_cache_dir(APP_NAME))


def get_config_path(data_dir: Path) -> Path:
    return data_dir / "config.toml"


def ensure_dirs(*dirs: Path) -> None:
    """Create the given directories if they don't exist."""
    for d in dirs:
        d.mkdir(parents=True, exist_ok=True)
