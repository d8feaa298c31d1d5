"""Background reading of image files picked or dropped by the user."""

from __future__ import annotations

import logging
from typing import List

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from ..core.images import ImageRejected, read_image_as_data_url

logger = logging.getLogger(__name__)


class _ImageReadWorker(QObject):
    loaded = pyqtSignal(int, str)
    rejected = pyqtSignal(int, str)
    failed = pyqtSignal(int, str)
    finished = pyqtSignal()

    def __init__(self, paths: List[str]) -> None:
        super().__init__()
        self.paths = paths

    def run(self) -> None:
        for index, path in enumerate(self.paths):
            try:
                data_url = read_image_as_data_url(path)
            except ImageRejected as exc:
                self.rejected.emit(index, str(exc))
            except OSError as exc:
                logger.warning("Could not read %s: %s", path, exc)
                self.failed.emit(index, str(exc))
            else:
                self.loaded.emit(index, data_url)
        self.finished.emit()


class ImageLoader(QObject):
    """Reads files off the UI thread and reports each completion separately.

    Every batch runs on its own thread, so completions from overlapping
    batches interleave in whatever order the reads finish.
    """

    loaded = pyqtSignal(int, str)
    rejected = pyqtSignal(int, str)
    failed = pyqtSignal(int, str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._threads: List[QThread] = []
        self._workers: List[_ImageReadWorker] = []

    def load(self, paths: List[str]) -> None:
        if not paths:
            return
        thread = QThread(self)
        worker = _ImageReadWorker(list(paths))
        worker.moveToThread(thread)

        worker.loaded.connect(self.loaded)
        worker.rejected.connect(self.rejected)
        worker.failed.connect(self.failed)
        worker.finished.connect(thread.quit)

        def cleanup() -> None:
            if thread in self._threads:
                self._threads.remove(thread)
            if worker in self._workers:
                self._workers.remove(worker)
            worker.deleteLater()
            thread.deleteLater()

        thread.finished.connect(cleanup)
        thread.started.connect(worker.run)
        self._threads.append(thread)
        self._workers.append(worker)
        thread.start()

    def wait_all(self) -> None:
        for thread in list(self._threads):
            thread.quit()
            thread.wait()
