import logging
import os
import tempfile
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config import (
    DEFAULT_DISPLAY_TIME,
    MAX_DISPLAY_TIME,
    config_path,
)
from .errors import ConfigIOError, ConfigParseError

logger = logging.getLogger(__name__)


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"
    CUSTOM = "custom"


class Corner(str, Enum):
    BOTTOM_RIGHT = "bottom_right"
    BOTTOM_LEFT = "bottom_left"
    TOP_RIGHT = "top_right"
    TOP_LEFT = "top_left"


@dataclass
class CustomImages:
    copy: Optional[str] = None
    clear: Optional[str] = None

    def path_for(self, kind: str) -> Optional[str]:
        """Image configured for a notification kind ('copy' | 'clear')."""
        path = {"copy": self.copy, "clear": self.clear}.get(kind)
        return path or None


@dataclass
class AppConfig:
    theme: Theme = Theme.DARK
    display_time: int = DEFAULT_DISPLAY_TIME  # seconds
    corner: Corner = Corner.BOTTOM_RIGHT
    custom_images: CustomImages = field(default_factory=CustomImages)

    @classmethod
    def from_dict(cls, data: Any) -> "AppConfig":
        """Build a config from its wire form, defaulting missing fields."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigParseError(f"failed to parse config: expected a mapping, got {type(data).__name__}")

        cfg = cls()
        if data.get("theme") is not None:
            cfg.theme = _parse_enum(Theme, "theme", data["theme"])
        if data.get("corner") is not None:
            cfg.corner = _parse_enum(Corner, "corner", data["corner"])
        if data.get("display_time") is not None:
            value = data["display_time"]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigParseError(
                    f"failed to parse config: display_time must be a non-negative integer, got {value!r}"
                )
            cfg.display_time = value
        images = data.get("custom_images")
        if images is not None:
            if not isinstance(images, dict):
                raise ConfigParseError("failed to parse config: custom_images must be a mapping")
            cfg.custom_images = CustomImages(
                copy=_parse_path("copy", images.get("copy")),
                clear=_parse_path("clear", images.get("clear")),
            )
        return cfg

    def to_dict(self) -> Dict[str, Any]:
        return {
            "theme": getattr(self.theme, "value", self.theme),
            "display_time": self.display_time,
            "corner": getattr(self.corner, "value", self.corner),
            "custom_images": {
                "copy": self.custom_images.copy,
                "clear": self.custom_images.clear,
            },
        }


def _parse_enum(enum_cls, name: str, value: Any):
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigParseError(
            f"failed to parse config: unknown {name} {value!r} (expected one of {allowed})", e
        ) from e


def _parse_path(kind: str, value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise ConfigParseError(f"failed to parse config: custom_images.{kind} must be a string")


def sanitize(cfg: AppConfig) -> AppConfig:
    """Return a copy with display_time corrected into [1, 60].

    0 means "unset" and becomes the default; anything above the maximum is
    clamped. Every other field passes through untouched.
    """
    display_time = cfg.display_time
    if display_time == 0:
        display_time = DEFAULT_DISPLAY_TIME
    if display_time > MAX_DISPLAY_TIME:
        display_time = MAX_DISPLAY_TIME
    if display_time != cfg.display_time:
        logger.warning("display_time %s out of range, using %s", cfg.display_time, display_time)
    return replace(cfg, display_time=display_time, custom_images=replace(cfg.custom_images))


class ConfigStore:
    """File-backed user preferences; nothing is kept between calls."""

    def __init__(self, directory: Optional[os.PathLike] = None):
        self.directory = directory

    @property
    def path(self) -> Path:
        return config_path(self.directory)

    def load(self) -> AppConfig:
        path = self.path
        if not path.exists():
            cfg = AppConfig()
            self.save(cfg)
            logger.info("Created default config at %s", path)
            return cfg
        try:
            with open(path, "r", encoding="utf-8") as f:
                contents = f.read()
        except OSError as e:
            raise ConfigIOError(str(e), e) from e
        except UnicodeDecodeError as e:
            raise ConfigParseError(f"failed to parse config: {e}", e) from e
        try:
            data = yaml.safe_load(contents)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"failed to parse config: {e}", e) from e
        cfg = sanitize(AppConfig.from_dict(data))
        logger.debug("Loaded config from %s", path)
        return cfg

    def save(self, cfg: AppConfig) -> None:
        path = self.path
        # Same checks as load, so a saved record always loads back
        try:
            record = cfg.to_dict()
        except AttributeError as e:
            raise ConfigParseError(f"invalid config: {e}", e) from e
        checked = AppConfig.from_dict(record)
        contents = yaml.safe_dump(sanitize(checked).to_dict(), sort_keys=False, allow_unicode=True)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=path.parent, prefix=".config-", suffix=".tmp", delete=False
            ) as f:
                tmp_name = f.name
                f.write(contents)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise ConfigIOError(str(e), e) from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        logger.debug("Saved config to %s", path)
