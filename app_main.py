"""Application entry point for AttemptQt."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication

from attempt_app.constants.attempt_constants import DEFAULT_RESULTS_DIR
from attempt_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from attempt_app.core.attempt_importer import AttemptImportError, load_attempt_from_file
from attempt_app.core.attempt_session import AttemptSession
from attempt_app.core.result_exporter import ResultFileSubmitter
from attempt_app.server.api_server import start_api_server
from attempt_app.ui.attempt_window import AttemptWindow
from attempt_app.ui.qt_scheduling import QtLifecycleSource, QtTickScheduler
from attempt_app.utils.logging_config import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a timed multiple-choice test attempt.")
    parser.add_argument("bundle", type=Path, help="Attempt bundle JSON handed over by the backend")
    parser.add_argument(
        "--results-dir",
        type=Path,
        default=Path(DEFAULT_RESULTS_DIR),
        help="Directory that receives <attemptId>.json on submit",
    )
    parser.add_argument("--serve", action="store_true", help="Expose the attempt over the HTTP API")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Load the attempt bundle, optionally start the API server, and launch the Qt UI."""
    args = _build_parser().parse_args(argv)
    logger = configure_logging(verbose=args.verbose)
    logger.info("Starting AttemptQt…")

    try:
        bundle = load_attempt_from_file(args.bundle)
    except OSError as exc:
        logger.error("Could not read attempt bundle %s: %s", args.bundle, exc)
        sys.exit(1)
    except AttemptImportError as exc:
        logger.error("Invalid attempt bundle %s: %s", args.bundle, exc)
        sys.exit(1)

    app = QApplication(sys.argv)
    session = AttemptSession(
        bundle,
        scheduler=QtTickScheduler(app),
        lifecycle=QtLifecycleSource(app),
        submitter=ResultFileSubmitter(args.results_dir),
    )

    if args.serve:
        start_api_server(session, host=args.host, port=args.port)
        logger.info("Attempt API available at http://%s:%d/attempt", args.host, args.port)

    window = AttemptWindow(session)
    window.show()
    session.start()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
