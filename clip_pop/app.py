import logging
from typing import Optional, Union

from PySide6 import QtCore, QtGui, QtWidgets

from .commands import Commands
from .config import APP_NAME, POLL_INTERVAL_MS
from .i18n import LocaleResolver, Translator, system_locale
from .settings import AppConfig, ConfigStore
from .watcher import ClipboardEvent, ClipboardWatcher

logger = logging.getLogger(__name__)


def clipboard_icon(size: int = 22) -> QtGui.QIcon:
    """Board with a clip on top; used when the theme has no paste icon."""
    pm = QtGui.QPixmap(size, size)
    pm.fill(QtCore.Qt.GlobalColor.transparent)
    unit = size / 22.0
    painter = QtGui.QPainter(pm)
    try:
        painter.setRenderHint(QtGui.QPainter.Antialiasing)
        painter.setPen(QtGui.QPen(QtGui.QColor(200, 200, 205), 1.5 * unit))
        painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
        painter.drawRoundedRect(QtCore.QRectF(4 * unit, 4 * unit, 14 * unit, 16 * unit), 2 * unit, 2 * unit)
        painter.setBrush(QtGui.QColor(200, 200, 205))
        painter.drawRect(QtCore.QRectF(8 * unit, 2 * unit, 6 * unit, 4 * unit))
        for row in (10, 14):
            painter.drawLine(QtCore.QPointF(7 * unit, row * unit), QtCore.QPointF(15 * unit, row * unit))
    finally:
        painter.end()
    return QtGui.QIcon(pm)


class AppController(QtCore.QObject):
    """Drives the clipboard poll and relays results to the UI layer."""

    clipboard_event = QtCore.Signal(dict)
    config_changed = QtCore.Signal(dict)
    locale_changed = QtCore.Signal(dict)
    command_failed = QtCore.Signal(str)

    def __init__(self, app: QtWidgets.QApplication, commands: Optional[Commands] = None):
        super().__init__()
        self.app = app
        self.commands = commands or Commands(
            store=ConfigStore(),
            resolver=LocaleResolver(),
            watcher=ClipboardWatcher(),
            quit_app=self._quit,
        )
        self.config = AppConfig()
        self.translator = Translator()

        self.tray = QtWidgets.QSystemTrayIcon(QtGui.QIcon.fromTheme("edit-paste", clipboard_icon()), self)
        self.tray.setToolTip(APP_NAME)
        self._tray_menu = QtWidgets.QMenu()
        self._quit_action = self._tray_menu.addAction("Quit")
        self._quit_action.triggered.connect(lambda: self.commands.exit_app())
        self.tray.setContextMenu(self._tray_menu)

        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(POLL_INTERVAL_MS)
        self._timer.timeout.connect(self.poll)

    def start(self):
        """Load locale and config, then begin polling. Connect the signals before calling."""
        self.set_language(system_locale())
        self._load_config()
        self.tray.show()
        self._timer.start()
        QtCore.QTimer.singleShot(0, self.poll)

    def _load_config(self):
        result = self.commands.load_config()
        if result.ok:
            self.config = AppConfig.from_dict(result.value)
        else:
            logger.warning("Using default config: %s", result.error)
            self.command_failed.emit(result.error)
            self.config = AppConfig()
        self.config_changed.emit(self.config.to_dict())

    def set_language(self, locale_tag: str):
        result = self.commands.load_locale(locale_tag)
        if result.ok:
            messages = result.value
        else:
            logger.warning("Locale fallback for %r: %s", locale_tag, result.error)
            self.command_failed.emit(result.error)
            messages = {}
        self.translator = Translator(messages)
        self._quit_action.setText(self.translator.t("quit", "Quit"))
        self.locale_changed.emit(messages)

    def apply_settings(self, config: Union[AppConfig, dict]):
        result = self.commands.save_config(config)
        if not result.ok:
            self.command_failed.emit(result.error)
            return
        self._load_config()

    @QtCore.Slot()
    def poll(self):
        result = self.commands.poll_clipboard()
        if not result.ok:
            self.command_failed.emit(result.error)
            return
        payload = result.value
        kind = payload["kind"]
        if kind == ClipboardEvent.NONE.value:
            return
        self.clipboard_event.emit({
            **payload,
            "display_time": self.config.display_time,
            "theme": self.config.theme.value,
            "corner": self.config.corner.value,
            "image": self.config.custom_images.path_for(kind),
            "message": self.translator.t("copied", "Copied!") if kind == ClipboardEvent.COPY.value else self.translator.t("cleared", "Cleared"),
        })

    def _quit(self, code: int = 0):
        self._timer.stop()
        self.tray.hide()
        QtWidgets.QApplication.exit(code)
