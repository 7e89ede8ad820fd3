"""Configuration loading utilities."""

import os
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from dotenv import load_dotenv


def get_environment() -> str:
    """Get the current environment name.

    Returns:
        Environment name from INDOOR_AIR_ENV, defaults to 'indoor-air'.
    """
    return os.getenv("INDOOR_AIR_ENV", "indoor-air")


def get_config_path(
    config_name: Optional[str] = None,
    config_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """Get path to a configuration file.

    Args:
        config_name: Name of config file (without path). If None, uses
            config-{environment}.yaml based on INDOOR_AIR_ENV.
        config_dir: Directory containing config files. If None, uses
            the 'config' directory at the repo root.

    Returns:
        Path to the configuration file.
    """
    if config_dir is None:
        # repo_root/indoorair/shared/config.py
        package_dir = Path(__file__).parent.parent.parent
        config_dir = package_dir / "config"

    config_dir = Path(config_dir)

    if config_name is None:
        env = get_environment()
        config_name = f"config-{env}.yaml"

    return config_dir / config_name


def load_yaml_config(
    config_path: Optional[Union[str, Path]] = None,
    load_env: bool = True,
) -> dict:
    """Load YAML configuration file.

    Args:
        config_path: Path to config file. If None, uses get_config_path().
        load_env: Whether to load .env file first.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        yaml.YAMLError: If config file is invalid YAML.
    """
    if load_env:
        load_dotenv()

    if config_path is None:
        config_path = get_config_path()
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def apply_env_overrides(data: dict, overrides: Dict[str, str]) -> dict:
    """Overlay environment variables onto a config dictionary.

    Args:
        data: Configuration dictionary loaded from YAML.
        overrides: Mapping of config key to environment variable name.
            Dotted keys ("mqtt.broker") address nested sections.

    Returns:
        A new dictionary; nested sections are copied, never mutated.
    """
    merged = dict(data)
    for key, env_var in overrides.items():
        value = os.getenv(env_var)
        if value is None or value == "":
            continue

        *parents, leaf = key.split(".")
        target = merged
        for parent in parents:
            section = dict(target.get(parent) or {})
            target[parent] = section
            target = section
        target[leaf] = value

    return merged
