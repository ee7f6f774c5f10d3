from rich import box
from rich.align import Align
from rich.columns import Columns
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text
from datetime import datetime
from typing import List, Optional

from models import (
    LearningSessionRecord,
    LearningStats,
    QuestionType,
    QuizQuestion,
    SessionResults,
    VocabularyEntry,
)
from review_scheduler import get_retrievability
from ui.styles import (
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
    SKY_BLUE,
    SUCCESS_GREEN,
    SUN_GOLD,
    TEXT_WHITE,
    create_welcome_banner,
    get_accuracy_style,
    get_status_style,
)

QUESTION_TITLES = {
    QuestionType.MEANING: "What does it mean?",
    QuestionType.USAGE: "Fill in the blank",
}


class QuestionPanel:
    """A styled panel for displaying a quiz question."""

    def __init__(self, question: QuizQuestion, question_number: int, total_questions: int):
        self.question = question
        self.question_number = question_number
        self.total_questions = total_questions

    @property
    def progress_percent(self) -> float:
        if self.total_questions == 0:
            return 0.0
        return (self.question_number - 1) / self.total_questions * 100

    def render(self) -> Panel:
        content = Text()

        content.append(self._create_progress_bar(), Style(color=MUTED_GRAY))
        content.append("\n")
        content.append(
            f"Question {self.question_number}/{self.total_questions}\n\n",
            Style(color=MUTED_GRAY),
        )
        content.append(self.question.text, Style(color=SKY_BLUE, bold=True))

        return Panel(
            Align.left(content),
            title=QUESTION_TITLES[self.question.question_type],
            subtitle="Type your answer (Enter to skip, ':q' to quit)",
            border_style=SKY_BLUE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _create_progress_bar(self) -> str:
        """Create a text-based progress bar."""
        width = 30
        filled = int(width * self.progress_percent / 100)
        bar = "█" * filled + "░" * (width - filled)
        return f"[{bar}] {self.progress_percent:.0f}%"

    def __rich__(self) -> Panel:
        return self.render()


class FeedbackPanel:
    """A styled panel for displaying answer feedback."""

    def __init__(
        self,
        is_correct: bool,
        correct_answer: str,
        user_answer: str = "",
        explanation: Optional[str] = None,
    ):
        self.is_correct = is_correct
        self.correct_answer = correct_answer
        self.user_answer = user_answer
        self.explanation = explanation

    def render(self) -> Panel:
        content = Text()

        if self.is_correct:
            content.append("✓ ", Style(color=SUCCESS_GREEN, bold=True))
            content.append("Correct!\n", Style(color=SUCCESS_GREEN, bold=True))
        else:
            content.append("✗ ", Style(color=ERROR_RED, bold=True))
            content.append("Not quite!\n", Style(color=ERROR_RED, bold=True))
            if self.user_answer.strip():
                content.append(
                    f"You answered: {self.user_answer}\n", Style(color=MUTED_GRAY)
                )
            else:
                content.append("Skipped\n", Style(color=MUTED_GRAY))

        content.append("\n")
        if self.explanation:
            content.append(self.explanation, Style(color=TEXT_WHITE))
        else:
            content.append("Correct answer: ", Style(color=MUTED_GRAY))
            content.append(self.correct_answer, Style(color=SUCCESS_GREEN, bold=True))

        return Panel(
            Align.left(content),
            title="Result",
            border_style=SUCCESS_GREEN if self.is_correct else ERROR_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class WordTable:
    """A styled table listing a user's vocabulary."""

    def __init__(
        self, entries: List[VocabularyEntry], now: Optional[datetime] = None
    ):
        self.entries = entries
        self.now = now

    def render(self) -> Panel:
        table = Table(
            show_header=True,
            header_style=Style(color=SKY_BLUE, bold=True),
            border_style=MUTED_GRAY,
            row_styles=[Style(), Style(dim=True)],
            box=box.HEAVY,
        )

        table.add_column("Word", style=Style(color=SKY_BLUE, bold=True))
        table.add_column("Definition", style=Style(color=TEXT_WHITE))
        table.add_column("Status", justify="center")
        table.add_column("Reviews", justify="right")
        table.add_column("Accuracy", justify="right")
        table.add_column("Recall", justify="right")

        for entry in self.entries:
            if entry.review_count:
                accuracy = Text(
                    f"{entry.accuracy * 100:.0f}%", style=get_accuracy_style(entry.accuracy)
                )
            else:
                accuracy = Text("-", style=Style(color=MUTED_GRAY))

            retrievability = get_retrievability(entry, self.now)
            if retrievability is None:
                recall = Text("-", style=Style(color=MUTED_GRAY))
            else:
                recall = Text(
                    f"{retrievability * 100:.0f}%", style=get_accuracy_style(retrievability)
                )

            table.add_row(
                entry.word,
                entry.definition or "",
                Text(entry.status.value, style=get_status_style(entry.status)),
                str(entry.review_count),
                accuracy,
                recall,
            )

        return Panel(
            Align.center(table),
            title=f"Vocabulary ({len(self.entries)} words)",
            border_style=SUN_GOLD,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class StatsPanel:
    """Learning statistics with the upcoming review schedule."""

    def __init__(self, stats: LearningStats):
        self.stats = stats

    def render(self) -> Panel:
        words = Table(show_header=False, border_style=MUTED_GRAY, box=box.ROUNDED)
        words.add_column("Label", style=Style(color=MUTED_GRAY))
        words.add_column("Value", justify="right")

        words.add_row("Total words", str(self.stats.total_words))
        words.add_row(
            "Unknown", Text(str(self.stats.unknown_words), style=Style(color=ERROR_RED))
        )
        words.add_row(
            "Learning", Text(str(self.stats.learning_words), style=Style(color=SUN_GOLD))
        )
        words.add_row(
            "Known", Text(str(self.stats.known_words), style=Style(color=SUCCESS_GREEN))
        )
        words.add_row("Reviews", str(self.stats.total_reviews))
        words.add_row(
            "Accuracy",
            Text(
                f"{self.stats.average_accuracy * 100:.0f}%",
                style=get_accuracy_style(self.stats.average_accuracy),
            ),
        )

        schedule = Table(
            show_header=True,
            header_style=Style(color=SKY_BLUE, bold=True),
            border_style=MUTED_GRAY,
            box=box.ROUNDED,
        )
        schedule.add_column("Due now", justify="center")
        schedule.add_column("Today", justify="center")
        schedule.add_column("Tomorrow", justify="center")
        schedule.add_column("This week", justify="center")
        schedule.add_column("Next week", justify="center")
        review = self.stats.review_schedule
        schedule.add_row(
            Text(str(self.stats.words_for_review), style=Style(color=INFO_BLUE, bold=True)),
            str(review.today),
            str(review.tomorrow),
            str(review.this_week),
            str(review.next_week),
        )

        return Panel(
            Columns([Align.center(words), Align.center(schedule)], align="center", padding=(0, 3)),
            title="Learning Stats",
            border_style=SUN_GOLD,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class WelcomeScreen:
    """Welcome screen with banner and session info."""

    def __init__(self, question_count: int, word_count: int):
        self.question_count = question_count
        self.word_count = word_count

    def render(self) -> Panel:
        banner = create_welcome_banner()
        banner.append("\n\n")
        banner.append("Type ':q' at any time to quit.\n", Style(color=MUTED_GRAY))

        stats = Table(show_header=False, border_style=MUTED_GRAY, box=box.ROUNDED)
        stats.add_column("Label", justify="center")
        stats.add_column("Value", justify="center")
        stats.add_row(
            Text("Words", style=Style(color=MUTED_GRAY)),
            Text(str(self.word_count), style=Style(color=SUN_GOLD, bold=True)),
        )
        stats.add_row(
            Text("Questions", style=Style(color=MUTED_GRAY)),
            Text(str(self.question_count), style=Style(color=SUN_GOLD, bold=True)),
        )

        return Panel(
            Columns(
                [Align.center(banner), Align.center(stats)],
                align="center",
                padding=(3, 3),
            ),
            border_style=SKY_BLUE,
            box=box.HEAVY,
            padding=(2, 3),
        )

    def __rich__(self) -> Panel:
        return self.render()


class SessionSummary:
    """Summary of a completed quiz session."""

    def __init__(self, results: SessionResults):
        self.results = results

    def render(self) -> Panel:
        incorrect = self.results.total_questions - self.results.correct_answers

        stats = Table(show_header=False, border_style=MUTED_GRAY, box=box.SIMPLE)
        stats.add_column("Label", style=Style(color=MUTED_GRAY))
        stats.add_column("Value", justify="right")

        stats.add_row("Questions", str(self.results.total_questions))
        stats.add_row(
            "Correct",
            Text(str(self.results.correct_answers), style=Style(color=SUCCESS_GREEN)),
        )
        stats.add_row("Incorrect", Text(str(incorrect), style=Style(color=ERROR_RED)))
        stats.add_row(
            "Accuracy",
            Text(
                f"{self.results.accuracy * 100:.0f}%",
                style=get_accuracy_style(self.results.accuracy),
            ),
        )

        content = Text()
        content.append("Session Complete!\n\n", Style(color=SKY_BLUE, bold=True))
        content.append("See you next time! 👋\n", Style(color=MUTED_GRAY))

        return Panel(
            Columns(
                [Align.center(content), Align.center(stats)],
                align="center",
                padding=(0, 1),
            ),
            title="Session Summary",
            border_style=SUN_GOLD,
            box=box.HEAVY,
            padding=(2, 3),
        )

    def __rich__(self) -> Panel:
        return self.render()


class HistoryTable:
    """Completed quiz sessions, most recent first."""

    def __init__(self, records: List[LearningSessionRecord]):
        self.records = records

    def render(self) -> Panel:
        table = Table(
            show_header=True,
            header_style=Style(color=SKY_BLUE, bold=True),
            border_style=MUTED_GRAY,
            box=box.ROUNDED,
        )
        table.add_column("Completed", style=Style(color=MUTED_GRAY))
        table.add_column("Questions", justify="right")
        table.add_column("Correct", justify="right")
        table.add_column("Accuracy", justify="right")

        for record in self.records:
            accuracy = (
                record.correct_answers / record.total_questions
                if record.total_questions
                else 0.0
            )
            table.add_row(
                record.completed_at.strftime("%Y-%m-%d %H:%M"),
                str(record.total_questions),
                str(record.correct_answers),
                Text(f"{accuracy * 100:.0f}%", style=get_accuracy_style(accuracy)),
            )

        return Panel(
            Align.center(table),
            title=f"Quiz History ({len(self.records)} sessions)",
            border_style=SUN_GOLD,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()
