"""Operations the host UI can invoke.

Every command returns a CommandResult; core errors are turned into their
message string instead of propagating to the host.
"""
import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from .errors import ClipPopError
from .i18n import LocaleResolver
from .settings import AppConfig, ConfigStore
from .watcher import ClipboardWatcher

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    ok: bool
    value: Any = None
    error: Optional[str] = None


def _run(name: str, fn: Callable[[], Any]) -> CommandResult:
    try:
        return CommandResult(ok=True, value=fn())
    except ClipPopError as e:
        logger.error("%s failed: %s", name, e)
        return CommandResult(ok=False, error=str(e))


class Commands:
    def __init__(
        self,
        store: Optional[ConfigStore] = None,
        resolver: Optional[LocaleResolver] = None,
        watcher: Optional[ClipboardWatcher] = None,
        quit_app: Optional[Callable[[int], Any]] = None,
    ):
        self.store = store or ConfigStore()
        self.resolver = resolver or LocaleResolver()
        self.watcher = watcher or ClipboardWatcher()
        self.quit_app = quit_app or sys.exit

    def load_config(self) -> CommandResult:
        return _run("load_config", lambda: self.store.load().to_dict())

    def save_config(self, config: Union[AppConfig, dict]) -> CommandResult:
        def _save():
            cfg = config if isinstance(config, AppConfig) else AppConfig.from_dict(config)
            self.store.save(cfg)

        return _run("save_config", _save)

    def load_locale(self, locale_tag: str) -> CommandResult:
        return _run("load_locale", lambda: self.resolver.resolve(locale_tag))

    def poll_clipboard(self) -> CommandResult:
        return _run("poll_clipboard", lambda: self.watcher.poll().to_dict())

    def exit_app(self) -> None:
        logger.info("Exiting")
        self.quit_app(0)
