"""Exceptions raised by the config, locale and clipboard layers."""
from typing import Optional


class ClipPopError(Exception):
    """Base exception; str() is the message handed to the host."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error


class ConfigError(ClipPopError):
    """Base exception for config persistence errors."""
    pass


class ConfigDirMissingError(ConfigError):
    """No override given and the platform has no per-user config directory."""
    pass


class ConfigIOError(ConfigError):
    """Reading, writing or creating the config file failed."""
    pass


class ConfigParseError(ConfigError):
    """The persisted config is malformed."""
    pass


class LocaleError(ClipPopError):
    """Base exception for locale resolution errors."""
    pass


class LocaleNotFoundError(LocaleError):
    """No candidate locale exists in either location."""
    pass


class LocaleIOError(LocaleError):
    """A locale file was found but could not be read."""
    pass


class LocaleParseError(LocaleError):
    """A locale file was found but is not a flat string mapping."""
    pass


class ClipboardError(ClipPopError):
    """Base exception for clipboard errors."""
    pass


class ClipboardAccessError(ClipboardError):
    """The OS clipboard could not be opened."""
    pass
