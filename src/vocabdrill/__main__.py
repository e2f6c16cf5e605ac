"""Console entry point for the trainer."""
import asyncio
import logging

from vocabdrill.app import FlashcardApp
from vocabdrill.config import settings
from vocabdrill.logging_config import setup_logging
from vocabdrill.monitoring import start_monitoring
from vocabdrill.models.word_models import Direction
from vocabdrill.services.session_service import Feedback, SessionState

logger = logging.getLogger(__name__)

HELP = (
    "Commands: r = reveal, y = I knew it, n = I did not, "
    "a <word> = <translation> = add, s = stats, q = quit"
)


def render(app: FlashcardApp) -> None:
    """Print the current card."""
    view = app.view()
    print()
    print(f"Mastered: {view.mastered_count}   Learning: {view.learning_count}")

    if view.state is SessionState.IDLE:
        print("No words yet. Add one with: a <word> = <translation>")
        return
    if view.state is SessionState.COMPLETE:
        print("Every word is mastered. Add new words to keep going.")
        return
    if view.word is None:
        return

    arrow = "source -> target" if view.direction is Direction.SOURCE_TO_TARGET else "target -> source"
    print(f"[{arrow}] {view.prompt}   (progress {round(view.progress)}%)")
    if view.revealed:
        print(f"  answer: {view.answer}")
    if view.feedback is Feedback.CORRECT:
        print("  correct!")
    elif view.feedback is Feedback.ERROR:
        print("  keep practicing")


async def run_console(app: FlashcardApp) -> None:
    """Read commands until the learner quits."""
    print(HELP)
    render(app)
    while True:
        line = (await asyncio.to_thread(input, "> ")).strip()
        if not line:
            continue
        command, _, rest = line.partition(" ")

        if command == "q":
            break
        elif command == "r":
            app.reveal()
        elif command in ("y", "n"):
            if app.respond(command == "y"):
                render(app)
                await app.session.wait_for_transition()
        elif command == "a":
            source, _, target = rest.partition("=")
            app.add_word(source, target)
            print(app.notice.text if app.notice else "")
        elif command == "s":
            summary = app.summary()
            print(f"Average progress: {summary.average_progress:.1f}%")
        else:
            print(HELP)
        render(app)


async def main() -> None:
    """Run the trainer."""
    app = FlashcardApp()
    try:
        logger.info("Starting trainer...")
        await app.start()
        await run_console(app)
    except (EOFError, KeyboardInterrupt):
        logger.info("Input closed, shutting down...")
    finally:
        logger.info("Cleaning up...")
        await app.stop()


def run() -> None:
    """Console script entry point."""
    setup_logging("Starting vocabdrill ...")

    if settings.monitoring.port is not None:
        start_monitoring(settings.monitoring.port)
        logger.info(f"Metrics served on port {settings.monitoring.port}")

    asyncio.run(main())


if __name__ == "__main__":
    run()
