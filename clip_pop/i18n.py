"""Localized UI strings with a most-specific-first fallback chain.

A request for ``ja-JP`` probes ``ja_jp`` then ``ja`` then ``en``. Each
candidate is looked up first in the user's ``<config_dir>/locales`` folder,
so a translation can be overridden without rebuilding, and then in the
bundled ``resources/locales`` folder.
"""
import logging
import os
import re
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from PySide6 import QtCore

from .config import BUNDLED_LOCALES_DIR, LOCALE_EXTENSION, user_locales_dir
from .errors import ConfigDirMissingError, LocaleIOError, LocaleNotFoundError, LocaleParseError

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en"

_SUBTAG_SEP = re.compile(r"[-_]")


def locale_candidates(raw: str) -> List[str]:
    """Normalized tags to try for ``raw``, most specific first.

    >>> locale_candidates("ja-JP")
    ['ja_jp', 'ja', 'en']
    >>> locale_candidates("EN-us")
    ['en_us', 'en']
    """
    parts = [p for p in _SUBTAG_SEP.split((raw or "").strip().lower()) if p]
    result = []
    while parts:
        result.append("_".join(parts))
        parts.pop()
    if FALLBACK_LOCALE not in result:
        result.append(FALLBACK_LOCALE)
    return result


def system_locale() -> str:
    """UI language of the desktop session, e.g. ``de_DE``."""
    name = QtCore.QLocale.system().name()
    if not name or name == "C":
        return FALLBACK_LOCALE
    return name


class LocaleResolver:
    """Loads the first existing locale file along the fallback chain.

    Files are re-read on every call. A file that exists but cannot be
    read or parsed stops the search; only absent files fall through.
    """

    def __init__(self, user_dir: Optional[os.PathLike] = None, bundled_dir: os.PathLike = BUNDLED_LOCALES_DIR):
        self.user_dir = Path(user_dir) if user_dir else None
        self.bundled_dir = Path(bundled_dir)

    def _search_dirs(self) -> List[Path]:
        dirs = []
        user_dir = self.user_dir
        if user_dir is None:
            try:
                user_dir = user_locales_dir()
            except ConfigDirMissingError:
                logger.debug("No config directory, skipping user locales")
        if user_dir is not None:
            dirs.append(user_dir)
        dirs.append(self.bundled_dir)
        return dirs

    def locate(self, raw_locale: str) -> Path:
        search_dirs = self._search_dirs()
        for candidate in locale_candidates(raw_locale):
            for directory in search_dirs:
                path = directory / f"{candidate}.{LOCALE_EXTENSION}"
                if path.exists():
                    return path
        raise LocaleNotFoundError("no locale resources found")

    def resolve(self, raw_locale: str) -> Dict[str, str]:
        path = self.locate(raw_locale)
        messages = read_locale_file(path)
        logger.info("Loaded locale %s for %r (%d keys)", path.name, raw_locale, len(messages))
        return messages


def read_locale_file(path: Path) -> Dict[str, str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            contents = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise LocaleIOError(f"failed to read locale {path}: {e}", e) from e
    try:
        data = yaml.safe_load(contents)
    except yaml.YAMLError as e:
        raise LocaleParseError(f"failed to parse locale: {e}", e) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise LocaleParseError(f"failed to parse locale: {path.name} is not a mapping")
    for key, value in data.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise LocaleParseError(
                f"failed to parse locale: {path.name} entry {key!r} is not a string pair"
            )
    return data


class Translator:
    def __init__(self, messages: Optional[Dict[str, str]] = None):
        self.messages = dict(messages or {})

    def t(self, key: str, fallback: str) -> str:
        return self.messages.get(key) or fallback
