import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from PySide6 import QtGui

from .errors import ClipboardAccessError

logger = logging.getLogger(__name__)

ClipboardReader = Callable[[], Optional[str]]


class ClipboardEvent(str, Enum):
    COPY = "copy"
    CLEAR = "clear"
    NONE = "none"


@dataclass(frozen=True)
class ClipboardPayload:
    kind: ClipboardEvent
    text: Optional[str] = None

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "text": self.text}


class ClipboardSnapshot:
    """Last observed clipboard text, guarded by its own lock."""

    def __init__(self, initial: Optional[str] = None):
        self.lock = threading.Lock()
        self.value: Optional[str] = initial

    @property
    def last(self) -> Optional[str]:
        with self.lock:
            return self.value


class QtClipboardReader:
    """Reads plain text from the system clipboard through Qt."""

    def __call__(self) -> Optional[str]:
        app = QtGui.QGuiApplication.instance()
        if app is None:
            raise ClipboardAccessError("clipboard unavailable: no GUI application running")
        clip = QtGui.QGuiApplication.clipboard()
        if clip is None:
            raise ClipboardAccessError("clipboard unavailable")
        return clip.text()


def normalize_text(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    text = raw.replace("\0", "")
    return text or None


def classify(previous: Optional[str], current: Optional[str]) -> ClipboardEvent:
    if current is not None:
        if previous == current:
            return ClipboardEvent.NONE
        return ClipboardEvent.COPY
    if previous is not None:
        return ClipboardEvent.CLEAR
    return ClipboardEvent.NONE


class ClipboardWatcher:
    """Polls the clipboard text and diffs it against the last read."""

    def __init__(self, reader: Optional[ClipboardReader] = None, snapshot: Optional[ClipboardSnapshot] = None):
        self.reader = reader or QtClipboardReader()
        self.snapshot = snapshot or ClipboardSnapshot()

    def poll(self) -> ClipboardPayload:
        # Held across read, compare and store so concurrent polls serialize
        with self.snapshot.lock:
            try:
                raw = self.reader()
            except ClipboardAccessError:
                raise
            except Exception as e:
                raise ClipboardAccessError(f"clipboard unavailable: {e}", e) from e
            current = normalize_text(raw)
            event = classify(self.snapshot.value, current)
            self.snapshot.value = current
        if event is not ClipboardEvent.NONE:
            logger.debug("Clipboard event: %s", event.value)
        return ClipboardPayload(kind=event, text=current)
