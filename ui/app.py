from rich.console import Console
from rich.text import Text
from rich.panel import Panel
from ui.components import (
    QuestionPanel,
    FeedbackPanel,
    WordTable,
    StatsPanel,
    HistoryTable,
    WelcomeScreen,
    SessionSummary,
)
from ui.styles import (
    SUCCESS_GREEN,
    SUN_GOLD,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
)
from typing import Optional, List

from models import (
    LearningSessionRecord,
    LearningStats,
    QuizQuestion,
    SessionResults,
    VocabularyEntry,
)

QUIT_COMMAND = ":q"


class QuizUI:
    """Main UI orchestrator for the vocabulary quiz."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_welcome(self, question_count: int, word_count: int) -> None:
        """Display the welcome screen and wait for user to press Enter."""
        welcome = WelcomeScreen(question_count=question_count, word_count=word_count)
        self.console.print(welcome)
        self.console.print()
        self.console.input(Text("Press Enter to start...", style=f"bold {MUTED_GRAY}"))

    def show_question(
        self,
        question: QuizQuestion,
        question_number: int,
        total_questions: int,
    ) -> Optional[str]:
        """Display a question and read a free-text answer.

        Args:
            question: The question to display.
            question_number: Current question number (1-indexed).
            total_questions: Total number of questions in the session.

        Returns:
            None if the user quits, otherwise the raw answer text. An empty
            answer is returned as-is and is scored as incorrect.
        """
        panel = QuestionPanel(
            question=question,
            question_number=question_number,
            total_questions=total_questions,
        )
        self.console.print(panel)
        self.console.print()

        user_input = self.console.input(Text("Your answer: ", style=f"bold {MUTED_GRAY}"))
        if user_input.strip().lower() == QUIT_COMMAND:
            return None
        return user_input

    def show_feedback(
        self,
        is_correct: bool,
        correct_answer: str,
        user_answer: str = "",
        explanation: Optional[str] = None,
    ) -> None:
        """Display feedback for the user's answer."""
        feedback = FeedbackPanel(
            is_correct=is_correct,
            correct_answer=correct_answer,
            user_answer=user_answer,
            explanation=explanation,
        )
        self.console.print(feedback)
        self.console.print()

    def show_warnings(self, warnings: List[str]) -> None:
        for warning in warnings:
            self.console.print(Text(f"Warning: {warning}", style=SUN_GOLD))

    def show_session_summary(self, results: SessionResults) -> None:
        """Display session completion summary."""
        self.console.print(SessionSummary(results))

    def show_word_table(self, entries: List[VocabularyEntry]) -> None:
        if not entries:
            self.show_info("No words yet. Add some with the 'add' command.")
            return
        self.console.print(WordTable(entries))

    def show_stats(self, stats: LearningStats) -> None:
        self.console.print(StatsPanel(stats))

    def show_history(self, records: List[LearningSessionRecord]) -> None:
        if not records:
            self.show_info("No completed quizzes yet.")
            return
        self.console.print(HistoryTable(records))

    def show_extracted_words(self, words: List[str]) -> None:
        if not words:
            self.show_info("No meaningful words found.")
            return
        self.console.print(
            Panel(
                Text(", ".join(words), style=INFO_BLUE),
                title=f"Extracted {len(words)} words",
                border_style=SUN_GOLD,
            )
        )

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(
            Panel(
                Text(f"Error: {message}", style=ERROR_RED),
                title="Error",
                border_style=ERROR_RED,
            )
        )

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(Text(message, style=INFO_BLUE))

    def show_success(self, message: str) -> None:
        """Display a success message."""
        self.console.print(Text(message, style=SUCCESS_GREEN))

    def show_quit_message(self) -> None:
        """Display the quit message."""
        self.console.print()
        self.console.print(
            Text("👋 Goodbye! Answers so far have been saved.", style=MUTED_GRAY)
        )

    def show_no_words(self) -> None:
        """Display message when there is nothing to quiz."""
        self.console.print(
            Panel(
                Text(
                    "🎉 Nothing to quiz!\n\nEvery word you track is already known. "
                    "Add new words to keep learning.",
                    style=SUCCESS_GREEN,
                ),
                title="All Done",
                border_style=SUCCESS_GREEN,
            )
        )

    def clear_screen(self) -> None:
        """Clear the terminal screen."""
        self.console.clear()

    def wait_for_continue(self) -> None:
        """Wait for user to press Enter to continue."""
        self.console.input(
            Text("Press Enter to continue...", style=f"bold {MUTED_GRAY}")
        )
