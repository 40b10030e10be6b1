import logging
import os
import sys
from pathlib import Path

from PySide6 import QtCore, QtGui, QtWidgets

from clip_pop.app import AppController
from clip_pop.config import APP_NAME, INSTANCE_LOCK_NAME, LOG_LEVEL_ENV, instance_lock_path
from clip_pop.errors import ConfigDirMissingError


def main():
    logging.basicConfig(
        level=os.environ.get(LOG_LEVEL_ENV, "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger("clip_pop")

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setWindowIcon(QtGui.QIcon.fromTheme("edit-copy"))
    app.setQuitOnLastWindowClosed(False)

    try:
        lock_path = instance_lock_path()
    except ConfigDirMissingError as e:
        logger.warning("%s, placing instance lock in temp dir", e)
        lock_path = Path(QtCore.QDir.tempPath()) / APP_NAME / INSTANCE_LOCK_NAME
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    lock = QtCore.QLockFile(str(lock_path))
    lock.setStaleLockTime(5000)
    if not lock.tryLock(1):
        logger.info("%s is already running", APP_NAME)
        return 0

    controller = AppController(app)
    controller.start()
    rc = app.exec()
    lock.unlock()
    sys.exit(rc)


if __name__ == "__main__":
    main()
