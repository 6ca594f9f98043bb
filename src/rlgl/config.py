"""Session configuration store.

The configuration lives in a small TOML file:
- `$XDG_CONFIG_HOME/rlgl/config` (or `$HOME/.config/rlgl/config`) when the
  environment has any `XDG_*` variable set,
- `$HOME/.rlgl/config` otherwise.

It is created empty on first use and rewritten by `rlgl login`.
"""
import logging
import os
import tomllib
from typing import Mapping, Optional

import tomli_w
from pydantic import ValidationError

from .models import SessionConfig

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    pass


def xdg_support(environ: Mapping[str, str]) -> bool:
    """True if any environment variable name starts with XDG_."""
    return any(name.startswith("XDG_") for name in environ)


def locate(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    home = env.get("HOME")
    if home is None:
        raise ConfigError("$HOME not set")

    path = os.path.join(home, ".rlgl", "config")
    if xdg_support(env):
        # An empty XDG_CONFIG_HOME counts as unset.
        xdg_home = env.get("XDG_CONFIG_HOME") or os.path.join(home, ".config")
        path = os.path.join(xdg_home, "rlgl", "config")
    return path


def load(path: str) -> SessionConfig:
    if not os.path.exists(path):
        logger.debug("No config at %s, creating an empty one", path)
        config = SessionConfig()
        save(config, path)
        return config

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"failed to read config [{path}]: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"failed to parse config [{path}]: {e}") from e

    try:
        return SessionConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config [{path}]: {e}") from e


def save(config: SessionConfig, path: str) -> None:
    cfgdir = os.path.dirname(path)
    if cfgdir and not os.path.isdir(cfgdir):
        try:
            os.makedirs(cfgdir, mode=0o755, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"failed to initialize config dir [{cfgdir}]: {e}") from e

    try:
        with open(path, "wb") as f:
            tomli_w.dump(config.model_dump(), f)
    except OSError as e:
        raise ConfigError(f"failed to write config: {e}") from e
    logger.debug("Wrote config to %s", path)
