"""Application startup for the console front end.

Orchestrates configuration parsing, logging setup, the dataset load, one
browse pass (filter, search, expanded cards) and, on request, speaking a form
through the Qt speech host.
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from loguru import logger

from app.application import Application
from app.browse_state import BrowseState
from app.console_view import (
    render_examples,
    render_forms,
    render_header,
    render_listing,
    render_load_error,
)
from app.services import SignalHandlerService
from config.service import ConfigurationServiceFactory
from core.exceptions import ConfigurationError
from verbs.models import ExampleVerb, VerbRecord
from verbs.query import FILTER_KEYS

CONSOLE_CONTROL_ID = "console"


def configure_logging(level: str) -> None:
    """Replace loguru's default sink with a stderr sink at ``level``."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def parse_console_args(argv: List[str]) -> argparse.Namespace:
    """Parse the front-end options left over after configuration parsing."""
    parser = argparse.ArgumentParser(prog="verb-console", description="Browse and hear European Portuguese verbs")
    parser.add_argument("--filter", choices=list(FILTER_KEYS), default="all", help="Category filter")
    parser.add_argument("--search", default="", help="Substring of a verb or its translation")
    parser.add_argument(
        "--expand",
        action="append",
        default=[],
        metavar="VERB",
        help="Show every table of VERB (repeatable)"
    )
    parser.add_argument("--say", metavar="TEXT", help="Pronounce TEXT with the selected pt-PT voice")
    return parser.parse_args(argv)


def run_application(argv: Optional[List[str]] = None) -> int:
    """Main application entry point.

    Returns:
        Process exit code: 0 on success, 1 when the dataset cannot be loaded,
        2 on invalid configuration
    """
    argv = sys.argv[1:] if argv is None else argv

    try:
        config_service, unknown_args = ConfigurationServiceFactory.create_from_args(argv)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    configure_logging(config_service.log_level)
    options = parse_console_args(unknown_args)

    app = Application(config_service)
    app.install()
    app.log_session_info()

    try:
        result = app.load_dataset()
        if result.is_failure():
            print(render_load_error(result.error))
            return 1

        state = BrowseState(search=options.search).with_filter(options.filter)
        for verb in options.expand:
            record = app.repository.get(verb)
            if record is None:
                logger.warning(f"Cannot expand unknown verb '{verb}'")
                continue
            state = state.toggle(record.rank)

        browse = app.browse(state)
        print(render_header(browse.status))
        print(render_listing(browse.rows))
        for record in browse.rows:
            if state.is_expanded(record.rank):
                print()
                print(_render_expanded(app, record))

        if options.say:
            _speak_and_wait(app, options.say)
        return 0
    finally:
        app.cleanup()


def _render_expanded(app: Application, record: VerbRecord) -> str:
    if isinstance(record, ExampleVerb):
        return render_examples(record, app.deriver.derive_examples(record))
    result = app.expand(record)
    if result.is_failure():
        return f"!! {record.rank_label} {record.verb}: {result.error}"
    return render_forms(record, result.unwrap())


def _speak_and_wait(app: Application, text: str) -> bool:
    """Speak ``text`` and run the Qt event loop until playback ends.

    Note:
        Qt is imported here so that browsing works without a Qt runtime.
    """
    from PyQt6.QtCore import QCoreApplication

    qt_app = QCoreApplication.instance() or QCoreApplication([sys.argv[0]])
    app.attach_speech(app.create_speech_host())

    SignalHandlerService(cleanup_callback=app.cleanup, quit_callback=qt_app.quit).install()
    app.dispatcher.on_speaking_ended = lambda _control: qt_app.quit()

    if not app.speak(text, CONSOLE_CONTROL_ID):
        logger.warning("Speech is not available on this system")
        return False

    qt_app.exec()
    return True
