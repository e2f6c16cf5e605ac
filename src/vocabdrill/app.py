"""Main application object tying the engine to a front end."""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from vocabdrill.config import settings
from vocabdrill.models.base import init_db
from vocabdrill.services.progress import ProgressSummary, summarize
from vocabdrill.services.selector import WordSelector
from vocabdrill.services.session_service import SessionController, SessionState, SessionView
from vocabdrill.services.storage_service import SqlWordStore, WordStore
from vocabdrill.services.word_service import WordRegistry, WordRegistryError


@dataclass
class Notice:
    """Transient message shown after adding a word."""
    type: str  # "success" or "error"
    text: str


class FlashcardApp:
    """Main application class."""

    def __init__(
        self,
        store: Optional[WordStore] = None,
        selector: Optional[WordSelector] = None,
        feedback_delay: Optional[float] = None,
        flip_delay: Optional[float] = None,
        notice_delay: Optional[float] = None,
    ):
        """Initialize the application."""
        self.store = store
        self.registry = WordRegistry()
        self.session: Optional[SessionController] = None
        self.selector = selector
        self.feedback_delay = feedback_delay
        self.flip_delay = flip_delay
        self.notice_delay = settings.session.notice_delay if notice_delay is None else notice_delay
        self.notice: Optional[Notice] = None
        self._notice_task: Optional[asyncio.Task] = None
        self.running = False
        self.logger = logging.getLogger(__name__)

    async def start(self) -> None:
        """Load the stored words and present the first card."""
        if self.running:
            return

        if self.store is None:
            init_db()
            self.store = SqlWordStore()
            self.logger.info("Database initialized")

        self.registry.replace_all(self.store.load())
        self.logger.info(f"Loaded {len(self.registry)} words")

        self.session = SessionController(
            self.registry,
            self.store,
            selector=self.selector,
            feedback_delay=self.feedback_delay,
            flip_delay=self.flip_delay,
        )
        self.session.advance()
        self.running = True

    async def stop(self) -> None:
        """Cancel pending timers and write the words one last time."""
        if not self.running:
            return

        if self.session:
            self.session.cancel()
        if self._notice_task and not self._notice_task.done():
            self._notice_task.cancel()
        self._notice_task = None
        self.store.save(self.registry.words)
        self.running = False
        self.logger.info("Application stopped")

    def add_word(self, source_text: str, target_text: str) -> bool:
        """Add a word and post a notice describing the outcome."""
        try:
            self.registry.add_word(source_text, target_text)
        except WordRegistryError as e:
            self.logger.warning(f"Rejected word {source_text!r} / {target_text!r}: {e}")
            self._post_notice(Notice(type="error", text=str(e)))
            return False

        if self.store:
            self.store.save(self.registry.words)
        self._post_notice(Notice(type="success", text="New word added"))
        if self.session:
            self.session.words_changed()
        return True

    def reveal(self) -> bool:
        return self.session.reveal()

    def respond(self, correct: bool) -> bool:
        return self.session.respond(correct)

    def advance(self) -> SessionState:
        return self.session.advance()

    def view(self) -> SessionView:
        return self.session.view()

    def summary(self) -> ProgressSummary:
        return summarize(self.registry.words)

    def _post_notice(self, notice: Notice) -> None:
        self.notice = notice
        if self._notice_task and not self._notice_task.done():
            self._notice_task.cancel()
        self._notice_task = asyncio.get_running_loop().create_task(self._clear_notice(notice))

    async def _clear_notice(self, notice: Notice) -> None:
        await asyncio.sleep(self.notice_delay)
        if self.notice is notice:
            self.notice = None
