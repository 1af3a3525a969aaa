"""Locate the TOML files that feed `Settings`."""

import os
from pathlib import Path


def get_config_dir() -> Path:
    """Get the configuration directory path.

    The config directory can be overridden with OTELKIT_CONFIG_DIR env var.
    Defaults to the nearest 'config/' found from the working directory upwards.
    """
    config_dir_env = os.environ.get("OTELKIT_CONFIG_DIR")
    if config_dir_env:
        path = Path(config_dir_env)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {config_dir_env}")
        return path

    current = Path.cwd()
    for _ in range(5):  # Look up to 5 levels
        config_path = current / "config"
        if config_path.is_dir():
            return config_path
        current = current.parent

    return Path("config")


def get_environment() -> str:
    """Get the current environment from OTELKIT_ENV.

    Defaults to 'development' if not set.
    """
    return os.environ.get("OTELKIT_ENV", "development")


def config_files() -> list[Path]:
    """Existing config files, highest priority first.

    Candidates are config/{OTELKIT_ENV}.toml, then config/default.toml.
    Either may be missing; with neither present the list is empty and
    only defaults and environment variables apply.
    """
    config_dir = get_config_dir()
    candidates = [config_dir / f"{get_environment()}.toml", config_dir / "default.toml"]
    return [path for path in candidates if path.is_file()]
