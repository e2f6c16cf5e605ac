"""Turn-by-turn flashcard session state machine."""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from vocabdrill.config import settings
from vocabdrill.models.word_models import Direction, Word
from vocabdrill.monitoring import answers_total, error_count, words_mastered
from vocabdrill.services.progress import progress_percent, summarize
from vocabdrill.services.selector import Selection, WordSelector, utc_now
from vocabdrill.services.storage_service import WordStore
from vocabdrill.services.word_service import WordRegistry

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """States of a learning session."""
    IDLE = "idle"  # No word loaded, the set is empty
    PRESENTING = "presenting"  # Card shown, answer hidden
    REVEALED = "revealed"  # Answer shown, waiting for the learner's verdict
    TRANSITIONING = "transitioning"  # Verdict recorded, moving to the next card
    COMPLETE = "complete"  # Every word is mastered


class Feedback(Enum):
    """Result indicator shown after an answer."""
    NONE = "none"
    CORRECT = "correct"
    ERROR = "error"


@dataclass
class SessionView:
    """Everything a renderer needs for one frame."""
    state: SessionState
    word: Optional[Word]
    direction: Direction
    prompt: Optional[str]
    answer: Optional[str]
    revealed: bool
    transitioning: bool
    feedback: Feedback
    progress: float
    mastered_count: int
    learning_count: int


class SessionController:
    """Owns the current card and applies the learner's answers.

    After an answer the next card is chosen right away, then installed after
    two delays: the feedback delay clears the indicator and hides the answer,
    the flip delay swaps in the next word.
    """

    def __init__(
        self,
        registry: WordRegistry,
        store: WordStore,
        selector: Optional[WordSelector] = None,
        clock: Optional[Callable[[], datetime]] = None,
        feedback_delay: Optional[float] = None,
        flip_delay: Optional[float] = None,
    ):
        """Initialize the controller with its word registry and store."""
        self.registry = registry
        self.store = store
        self.selector = selector or WordSelector()
        self.clock = clock or utc_now
        self.feedback_delay = settings.session.feedback_delay if feedback_delay is None else feedback_delay
        self.flip_delay = settings.session.flip_delay if flip_delay is None else flip_delay

        self.state = SessionState.IDLE
        self.current_word: Optional[Word] = None
        self.direction = Direction.SOURCE_TO_TARGET
        self.revealed = False
        self.feedback = Feedback.NONE
        self.last_shown: Optional[Word] = None
        self._transition_task: Optional[asyncio.Task] = None

    @property
    def transitioning(self) -> bool:
        return self.state is SessionState.TRANSITIONING

    def advance(self) -> SessionState:
        """Load a card when no card is active."""
        if self.state not in (SessionState.IDLE, SessionState.COMPLETE):
            logger.debug(f"Ignoring advance in state {self.state.value}")
            return self.state

        self._present(self.selector.select(self.registry.words, self.last_shown))
        return self.state

    def reveal(self) -> bool:
        """Show the answer of the current card."""
        if self.state is not SessionState.PRESENTING:
            logger.debug(f"Ignoring reveal in state {self.state.value}")
            return False

        self.revealed = True
        self.state = SessionState.REVEALED
        return True

    def respond(self, correct: bool) -> bool:
        """Record the learner's verdict and schedule the next card.

        Must be called from a running event loop. Returns False when no
        revealed card is waiting for an answer.
        """
        if self.state is not SessionState.REVEALED or self.current_word is None:
            logger.debug(f"Ignoring response in state {self.state.value}")
            return False

        word = self.current_word
        word.record_answer(self.direction, correct, self.clock())
        answers_total.labels(result="correct" if correct else "error").inc()
        logger.info(
            f"Answer for {word.source_text!r} ({self.direction.value}): "
            f"{'correct' if correct else 'wrong'}, streak {word.consecutive_successes}"
        )

        self.feedback = Feedback.CORRECT if correct else Feedback.ERROR
        self.state = SessionState.TRANSITIONING
        try:
            self.store.save(self.registry.words)
        except Exception as e:
            logger.error(f"Failed to save word list after answer: {e}")
            error_count.labels(error_type="store_save").inc()

        next_selection = self.selector.select(self.registry.words, word)
        self._transition_task = asyncio.get_running_loop().create_task(
            self._finish_transition(next_selection)
        )
        return True

    def words_changed(self) -> None:
        """Re-evaluate after words were added from outside the session."""
        if self.state in (SessionState.IDLE, SessionState.COMPLETE):
            self.advance()

    async def wait_for_transition(self) -> None:
        """Wait until a pending transition has installed the next card."""
        task = self._transition_task
        if task is not None and not task.done():
            await task

    def cancel(self) -> None:
        """Drop a pending transition and unload the card."""
        task = self._transition_task
        if task is not None and not task.done():
            task.cancel()
        self._transition_task = None
        self.current_word = None
        self.revealed = False
        self.feedback = Feedback.NONE
        self.state = SessionState.IDLE

    def view(self) -> SessionView:
        """Snapshot of the session for rendering."""
        summary = summarize(self.registry.words)
        word = self.current_word
        return SessionView(
            state=self.state,
            word=word,
            direction=self.direction,
            prompt=word.prompt(self.direction) if word else None,
            answer=word.answer(self.direction) if word else None,
            revealed=self.revealed,
            transitioning=self.transitioning,
            feedback=self.feedback,
            progress=progress_percent(word) if word else 0.0,
            mastered_count=summary.mastered,
            learning_count=summary.learning,
        )

    async def _finish_transition(self, next_selection: Optional[Selection]) -> None:
        await asyncio.sleep(self.feedback_delay)
        self.feedback = Feedback.NONE
        self.revealed = False

        await asyncio.sleep(self.flip_delay)
        if next_selection is None:
            # Words may have been added while the card was flipping
            next_selection = self.selector.select(self.registry.words, self.last_shown)
        self._transition_task = None
        self._present(next_selection)

    def _present(self, selection: Optional[Selection]) -> None:
        summary = summarize(self.registry.words)
        words_mastered.set(summary.mastered)

        if selection is None:
            self.current_word = None
            self.revealed = False
            self.state = SessionState.COMPLETE if len(self.registry) else SessionState.IDLE
            logger.info(f"No word to present, session is {self.state.value}")
            return

        self.current_word = selection.word
        self.direction = selection.direction
        self.last_shown = selection.word
        self.revealed = False
        self.state = SessionState.PRESENTING
