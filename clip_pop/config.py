import os
from pathlib import Path
from typing import Optional

from platformdirs import user_config_dir

from .errors import ConfigDirMissingError

APP_NAME = "ClipPopMedroa"
CONFIG_DIR_ENV = "CLIP_POP_MEDROA_CONFIG_DIR"
LOG_LEVEL_ENV = "CLIP_POP_LOG_LEVEL"
CONFIG_FILENAME = "config.yaml"
LOCALES_DIRNAME = "locales"
LOCALE_EXTENSION = "yaml"
BUNDLED_LOCALES_DIR = Path(__file__).parent / "resources" / "locales"
INSTANCE_LOCK_NAME = "instance.lock"

POLL_INTERVAL_MS = 900

DEFAULT_DISPLAY_TIME = 3
MAX_DISPLAY_TIME = 60


def config_dir(override: Optional[os.PathLike] = None) -> Path:
    """Directory holding config.yaml and the user locales folder.

    An explicit override wins, then the environment variable, then the
    platform's per-user config directory.
    """
    if override:
        return Path(override)
    env_dir = os.environ.get(CONFIG_DIR_ENV)
    if env_dir:
        return Path(env_dir)

    base = user_config_dir(APP_NAME, appauthor=False)
    # platformdirs falls back to an unexpanded "~" when HOME is unknown
    if not base or not Path(base).is_absolute():
        raise ConfigDirMissingError("unable to determine config directory")
    return Path(base)


def config_path(override: Optional[os.PathLike] = None) -> Path:
    return config_dir(override) / CONFIG_FILENAME


def user_locales_dir(override: Optional[os.PathLike] = None) -> Path:
    return config_dir(override) / LOCALES_DIRNAME


def instance_lock_path(override: Optional[os.PathLike] = None) -> Path:
    return config_dir(override) / INSTANCE_LOCK_NAME
