"""Application initialization and wiring."""
from __future__ import annotations

import sys
from typing import Hashable, Optional, Tuple

from loguru import logger

from app.browse_state import BrowseState
from app.services import CleanupService, ExceptionHandlerService
from app.use_cases import (
    BrowseResult,
    BrowseVerbsUseCase,
    ExpandVerbUseCase,
    LoadDatasetUseCase,
    SpeakFormUseCase,
)
from config.service import ConfigurationService
from core.exceptions import FormDerivationError, LoadError, SpeechHostError
from core.result import Result
from speech.dispatcher import SpeechDispatcher
from speech.factory import create_speech_host
from speech.host import SpeechHost
from speech.voice_selector import VoiceSelector, VoiceSubscription
from verbs.forms import FormDeriver, VerbForms
from verbs.models import SchemaKind, VerbRecord
from verbs.query import QueryEngine
from verbs.repository import ConjugationRepository


class Application:
    """Owns the core components and their lifecycle.

    The voice selector is the one stateful core component: it is created here,
    attached to a speech host when one is available, and detached on cleanup.

    Attributes:
        config: Configuration facade
        repository: Verb dataset store
        deriver: Form derivation for expanded verbs
        query_engine: Filter/search engine
        selector: European Portuguese voice selector
        dispatcher: Pronunciation dispatcher (no host until ``attach_speech``)
        cleanup_service: Ordered shutdown handlers
    """

    def __init__(
        self,
        config: ConfigurationService,
        repository: Optional[ConjugationRepository] = None,
        deriver: Optional[FormDeriver] = None,
        query_engine: Optional[QueryEngine] = None,
        selector: Optional[VoiceSelector] = None,
    ):
        self.config = config
        self.repository = repository or ConjugationRepository(
            config.dataset_location,
            schema=config.dataset_schema,
            timeout=config.dataset_timeout,
        )
        self.deriver = deriver or FormDeriver()
        self.query_engine = query_engine or QueryEngine()
        self.selector = selector or VoiceSelector(config.preferred_voices)
        self.dispatcher = SpeechDispatcher(
            host=None,
            selector=self.selector,
            params=config.utterance_params,
            cancel_delay_ms=config.cancel_delay_ms,
            strip_translation=config.strip_translation,
        )

        self.load_dataset_use_case = LoadDatasetUseCase(self.repository)
        self.browse_use_case = BrowseVerbsUseCase(self.query_engine)
        self.expand_use_case = ExpandVerbUseCase(self.deriver)
        self.speak_use_case = SpeakFormUseCase(self.dispatcher)

        self.cleanup_service = CleanupService()
        self.exception_handler = ExceptionHandlerService()
        self._voice_subscription: Optional[VoiceSubscription] = None

    def install(self) -> None:
        """Install global exception logging and atexit cleanup."""
        self.exception_handler.install()
        self.cleanup_service.install_atexit()
        self.cleanup_service.register(self.exception_handler.uninstall, "exception_handler")

    def log_session_info(self) -> None:
        logger.info(f"Session config: {self.config.to_dict()} python={sys.version.split(' ')[0]}")

    # ---- Dataset ----

    def load_dataset(self) -> Result[Tuple[VerbRecord, ...], LoadError]:
        """Load the dataset once; example-sentence datasets turn on translation stripping."""
        result = self.load_dataset_use_case.execute()
        if result.is_success() and self.repository.loaded_schema is SchemaKind.EXAMPLES:
            self.dispatcher.strip_translation = True
        return result

    def browse(self, state: BrowseState) -> BrowseResult:
        return self.browse_use_case.execute(self.repository.records, state)

    def expand(self, record: VerbRecord) -> Result[VerbForms, FormDerivationError]:
        return self.expand_use_case.execute(record)

    # ---- Speech ----

    def create_speech_host(self) -> Optional[SpeechHost]:
        """Create the configured speech host, or None when speech is unavailable."""
        try:
            return create_speech_host(self.config.engine, qt_engine=self.config.qt_engine)
        except SpeechHostError:
            logger.exception("Speech host '{}' unavailable; pronunciation disabled.", self.config.engine)
            return None

    def attach_speech(self, host: Optional[SpeechHost]) -> None:
        """Bind a host to the dispatcher and start following its voice list."""
        self.dispatcher.host = host
        if host is None:
            return
        self._voice_subscription = self.selector.attach(host)
        self.cleanup_service.register(self._voice_subscription.close, "voice_subscription")

    def speak(self, text: str, control_id: Optional[Hashable] = None) -> bool:
        return self.speak_use_case.execute(text, control_id)

    def cleanup(self) -> None:
        self.cleanup_service.cleanup()
