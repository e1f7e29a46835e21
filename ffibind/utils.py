import os
from pathlib import Path

import tomli as toml

from ffibind import logging as ffibind_logging

logger = ffibind_logging.get_logger(__name__)

_PACKAGE_DIR = Path(__file__).resolve().parent


def _merge_configs(config, default_config):
    """Overlay `config` on `default_config`, table by table.

    Keys unknown to the defaults are kept. A table on one side and a scalar
    on the other is a TypeError.
    """
    merged = dict(default_config)
    for key, value in config.items():
        default_value = default_config.get(key)
        if key not in default_config:
            merged[key] = value
        elif isinstance(value, dict) and isinstance(default_value, dict):
            merged[key] = _merge_configs(value, default_value)
        elif isinstance(value, dict) or isinstance(default_value, dict):
            raise TypeError(f"config key {key!r} is {type(value).__name__}, "
                            f"expected {type(default_value).__name__}")
        else:
            merged[key] = value
    return merged


def load_default_config():
    """Load the bundled default configuration."""
    candidate = _PACKAGE_DIR / "_resources" / "ffibind.default.toml"
    if candidate.is_file():
        with open(candidate, "rb") as f:
            return toml.load(f)

    raise FileNotFoundError("Could not load _resources/ffibind.default.toml")


def load_declaration_schema_text() -> str:
    """Return the declaration JSON Schema bundled with the code generator."""
    candidate = _PACKAGE_DIR / "code_generator" / "schema.json"
    if candidate.is_file():
        return candidate.read_text(encoding="utf-8")

    raise FileNotFoundError("Could not locate code_generator/schema.json")


def try_load_config(config_file=None):
    """Load user configuration merged with defaults.

    Resolution order:
    1. Explicit `config_file` argument.
    2. `FFIBIND_CONFIG` environment variable.
    3. `./ffibind.toml` relative to current working directory.
    4. `ffibind.toml` inside the repository checkout (development mode).
    If none are found, return the default config alone.
    """
    default_config = load_default_config()

    if config_file:
        path = Path(config_file).expanduser()
        if not path.is_file():
            raise FileNotFoundError(f"Could not find config file {path}")
    elif os.environ.get("FFIBIND_CONFIG"):
        path = Path(os.environ["FFIBIND_CONFIG"]).expanduser()
        if not path.is_file():
            raise FileNotFoundError(f"FFIBIND_CONFIG={path} does not point to a readable file")
    else:
        candidates = [Path.cwd() / "ffibind.toml", _PACKAGE_DIR.parent / "ffibind.toml"]
        path = next((c for c in candidates if c.is_file()), None)
        if path is None:
            logger.info("No user config found; using the bundled defaults")
            return default_config

    logger.debug("loading config from %s", path)
    with open(path, "rb") as f:
        return _merge_configs(toml.load(f), default_config)
