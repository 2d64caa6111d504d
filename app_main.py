"""Application entry point for the Pariksha exam engine."""

from __future__ import annotations

import sys

from PySide6.QtCore import QCoreApplication

from exam_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from exam_app.core.exam_manager import ExamManager
from exam_app.core.tick_scheduler import QtTickScheduler
from exam_app.server.api_server import start_api_server
from exam_app.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, start the API server, and run the Qt event loop for ticks."""
    logger = configure_logging()
    logger.info("Starting Pariksha exam engine...")

    app = QCoreApplication(sys.argv)
    exam_manager = ExamManager(scheduler_factory=QtTickScheduler)
    start_api_server(exam_manager=exam_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("Exam API available at http://%s:%d/", DEFAULT_HOST, DEFAULT_PORT)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
