import argparse
import logging
import random
import sys
import time
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from config import settings, setup_logging
from models import VocabularyEntry, WordStatus
from quiz import NoWordsAvailableError, QuizSessionManager, get_learning_stats
from storage import (
    DEFAULT_DB_PATH,
    JsonFileLearningSessionRepository,
    JsonFileWordRepository,
    LearningSessionRepository,
    WordRepository,
    get_session_repo,
    get_word_repo,
)
from textproc import extract_meaningful_words
from ui import QuizUI

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(description="Vocabulary Quiz")
    parser.add_argument(
        "--user",
        "-u",
        type=str,
        default=settings.DEFAULT_USER,
        help=f"User whose words are used (default: {settings.DEFAULT_USER})",
    )
    parser.add_argument(
        "--db",
        type=str,
        default=str(DEFAULT_DB_PATH),
        help="SQLite database path",
    )
    parser.add_argument(
        "--json",
        type=str,
        default=None,
        help="Store data in this JSON file instead of SQLite",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    quiz_parser = subparsers.add_parser("quiz", help="Run an interactive quiz")
    quiz_parser.add_argument(
        "--count",
        "-n",
        type=int,
        default=None,
        help="Number of questions (default: 5)",
    )
    quiz_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )

    add_parser = subparsers.add_parser("add", help="Track a new word")
    add_parser.add_argument("word", type=str)
    add_parser.add_argument("--definition", "-d", type=str, default=None)
    add_parser.add_argument("--example", "-e", type=str, default=None)
    add_parser.add_argument(
        "--status",
        choices=[status.value for status in WordStatus],
        default=WordStatus.UNKNOWN.value,
    )

    subparsers.add_parser("list", help="List tracked words")

    remove_parser = subparsers.add_parser("remove", help="Stop tracking a word")
    remove_parser.add_argument("word", type=str)

    extract_parser = subparsers.add_parser(
        "extract", help="Track the meaningful words of a text"
    )
    extract_parser.add_argument("text", type=str)

    subparsers.add_parser("stats", help="Show learning statistics")
    subparsers.add_parser("history", help="Show completed quiz sessions")

    # Default to an interactive quiz
    parser.set_defaults(command="quiz", count=None, seed=None)
    return parser


def open_repositories(args) -> tuple[WordRepository, LearningSessionRepository]:
    """Open the word and session stores selected on the command line."""
    if args.json:
        return (
            JsonFileWordRepository(args.json),
            JsonFileLearningSessionRepository(args.json),
        )
    db_path = Path(args.db)
    return get_word_repo(db_path), get_session_repo(db_path)


def run_quiz(args, ui: QuizUI) -> int:
    """Run the interactive quiz subcommand."""
    word_repo, session_repo = open_repositories(args)
    manager = QuizSessionManager(
        word_repo,
        rng=random.Random(args.seed),
        session_repo=session_repo,
    )

    try:
        session = manager.start_session(args.user, args.count)
    except NoWordsAvailableError:
        ui.show_no_words()
        return 1
    except ValueError as e:
        ui.show_error(str(e))
        return 2

    ui.show_welcome(
        question_count=session.total_questions,
        word_count=len(word_repo.get_entries_for_user(args.user)),
    )

    question = session.current_question
    number = 1
    try:
        while question is not None:
            ui.clear_screen()
            started = time.monotonic()
            answer = ui.show_question(question, number, session.total_questions)
            if answer is None:
                ui.show_quit_message()
                return 0
            elapsed_ms = int((time.monotonic() - started) * 1000)

            result = manager.submit_answer(session.session_id, answer, elapsed_ms)
            ui.show_feedback(
                result.is_correct, result.correct_answer, answer, result.explanation
            )
            ui.show_warnings(result.warnings)

            if result.session_completed:
                ui.show_session_summary(result.results)
                break

            ui.wait_for_continue()
            question = result.next_question
            number += 1
    except (KeyboardInterrupt, EOFError):
        ui.show_quit_message()
    return 0


def run_add(args, ui: QuizUI) -> int:
    word_repo, _ = open_repositories(args)
    if word_repo.get_entry_by_word(args.user, args.word):
        ui.show_error(f"'{args.word}' is already in your word list.")
        return 1

    try:
        entry = VocabularyEntry(
            user_id=args.user,
            word=args.word.strip(),
            definition=args.definition,
            example_sentence=args.example,
            status=WordStatus(args.status),
        )
        word_repo.save_entry(entry)
    except (ValidationError, ValueError) as e:
        ui.show_error(str(e))
        return 1

    ui.show_success(f"Added '{entry.word}' ({entry.status.value}).")
    return 0


def run_list(args, ui: QuizUI) -> int:
    word_repo, _ = open_repositories(args)
    ui.show_word_table(word_repo.get_entries_for_user(args.user))
    return 0


def run_remove(args, ui: QuizUI) -> int:
    word_repo, _ = open_repositories(args)
    entry = word_repo.get_entry_by_word(args.user, args.word)
    if entry is None or not word_repo.delete_entry(entry.id):
        ui.show_error(f"'{args.word}' is not in your word list.")
        return 1
    ui.show_success(f"Removed '{entry.word}'.")
    return 0


def run_extract(args, ui: QuizUI) -> int:
    """Track every meaningful word of a text that is not tracked yet."""
    word_repo, _ = open_repositories(args)
    added = []
    for word in extract_meaningful_words(args.text):
        if word_repo.get_entry_by_word(args.user, word):
            continue
        word_repo.save_entry(VocabularyEntry(user_id=args.user, word=word))
        added.append(word)

    logger.info("Extracted %d new words for user %s", len(added), args.user)
    ui.show_extracted_words(added)
    return 0


def run_stats(args, ui: QuizUI) -> int:
    word_repo, _ = open_repositories(args)
    ui.show_stats(get_learning_stats(word_repo, args.user))
    return 0


def run_history(args, ui: QuizUI) -> int:
    _, session_repo = open_repositories(args)
    ui.show_history(session_repo.get_sessions_for_user(args.user))
    return 0


COMMANDS = {
    "quiz": run_quiz,
    "add": run_add,
    "list": run_list,
    "remove": run_remove,
    "extract": run_extract,
    "stats": run_stats,
    "history": run_history,
}


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    """Main entry point with CLI routing."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(debug=args.debug or settings.DEBUG)

    ui = QuizUI(console)
    return COMMANDS[args.command](args, ui)


if __name__ == "__main__":
    sys.exit(main())
