import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

import fsrs

from textproc import normalize_word


class WordStatus(str, Enum):
    UNKNOWN = "unknown"
    LEARNING = "learning"
    KNOWN = "known"


class QuestionType(str, Enum):
    MEANING = "meaning"
    USAGE = "usage"


def new_id() -> str:
    return str(uuid.uuid4())


# ============================================================================
# FSRS Review State
# ============================================================================


class FSRSState(BaseModel):
    """
    Stores FSRS card state. These fields mirror the py-fsrs Card class
    but are stored as primitives for JSON serialization with Pydantic.
    """

    stability: float | None = None
    difficulty: float | None = None
    due: datetime | None = None
    last_review: datetime | None = None
    state: int = 1  # 1=Learning, 2=Review, 3=Relearning
    step: int | None = 0  # Learning step (None when in Review state)

    def to_card(self) -> fsrs.Card:
        """Convert our FSRSState model to a py-fsrs Card object."""
        card = fsrs.Card()
        card.stability = self.stability
        card.difficulty = self.difficulty
        if self.due:
            card.due = self.due.replace(tzinfo=timezone.utc)

        if self.last_review:
            card.last_review = self.last_review.replace(tzinfo=timezone.utc)

        card.state = fsrs.State(self.state)
        card.step = self.step
        return card

    @classmethod
    def from_fsrs_card(cls, card: fsrs.Card) -> "FSRSState":
        """Convert a py-fsrs Card object to our FSRSState model."""
        return cls(
            stability=card.stability,
            difficulty=card.difficulty,
            due=card.due.replace(tzinfo=None) if card.due else None,
            last_review=card.last_review.replace(tzinfo=None)
            if card.last_review
            else None,
            state=card.state.value,
            step=card.step,
        )


# ============================================================================
# Vocabulary
# ============================================================================


class VocabularyEntry(BaseModel):
    """One word a user is tracking."""

    id: str = Field(default_factory=new_id)
    user_id: str
    word: str = Field(min_length=1)
    normalized_word: str = ""
    status: WordStatus = WordStatus.UNKNOWN
    definition: str | None = None
    example_sentence: str | None = None
    language_code: str = "en"
    review_count: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)
    last_reviewed_at: datetime | None = None
    created_at: datetime = Field(default_factory=datetime.now)

    # FSRS state for spaced repetition scheduling
    fsrs_state: FSRSState | None = None

    @model_validator(mode="after")
    def _check_counts(self) -> "VocabularyEntry":
        if self.correct_count > self.review_count:
            raise ValueError(
                f"correct_count ({self.correct_count}) cannot exceed "
                f"review_count ({self.review_count})"
            )
        if not self.normalized_word:
            self.normalized_word = normalize_word(self.word)
        return self

    @property
    def is_quiz_eligible(self) -> bool:
        """Known words are excluded from quizzing."""
        return self.status in (WordStatus.UNKNOWN, WordStatus.LEARNING)

    @property
    def accuracy(self) -> float:
        if self.review_count == 0:
            return 0.0
        return self.correct_count / self.review_count


# ============================================================================
# Quiz Models
# ============================================================================


class QuizQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    entry: VocabularyEntry
    question_type: QuestionType
    text: str
    correct_answer: str


class QuizAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: str
    answer_text: str
    is_correct: bool
    response_time_ms: int | None = Field(default=None, ge=0)


class SessionResults(BaseModel):
    session_id: str
    total_questions: int
    correct_answers: int
    accuracy: float
    started_at: datetime
    completed_at: datetime | None = None
    answers: list[QuizAnswer] = Field(default_factory=list)


class QuizSession(BaseModel):
    """Tracks one in-progress quiz.

    ``position`` always equals ``len(answers)``; the session is complete
    once every question has been answered.
    """

    session_id: str = Field(default_factory=new_id)
    user_id: str
    questions: list[QuizQuestion]
    position: int = 0
    answers: list[QuizAnswer] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: datetime | None = None

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def is_complete(self) -> bool:
        return self.position >= self.total_questions

    @property
    def current_question(self) -> QuizQuestion | None:
        if self.is_complete:
            return None
        return self.questions[self.position]

    @property
    def correct_count(self) -> int:
        return sum(1 for answer in self.answers if answer.is_correct)

    def record(self, answer: QuizAnswer) -> None:
        """Append an answer and advance to the next question."""
        self.answers.append(answer)
        self.position += 1

    def results(self) -> SessionResults:
        total = self.total_questions
        correct = self.correct_count
        return SessionResults(
            session_id=self.session_id,
            total_questions=total,
            correct_answers=correct,
            accuracy=correct / total if total > 0 else 0.0,
            started_at=self.started_at,
            completed_at=self.completed_at,
            answers=list(self.answers),
        )


class AnswerResult(BaseModel):
    is_correct: bool
    correct_answer: str
    explanation: str
    next_question: QuizQuestion | None = None
    session_completed: bool = False
    results: SessionResults | None = None
    # Persistence problems that did not block the quiz
    warnings: list[str] = Field(default_factory=list)


class LearningSessionRecord(BaseModel):
    """Summary of a completed session, kept for history."""

    id: str
    user_id: str
    session_type: str = "quiz"
    started_at: datetime
    completed_at: datetime
    total_questions: int
    correct_answers: int

    @classmethod
    def from_session(cls, session: QuizSession) -> "LearningSessionRecord":
        return cls(
            id=session.session_id,
            user_id=session.user_id,
            started_at=session.started_at,
            completed_at=session.completed_at or datetime.now(),
            total_questions=session.total_questions,
            correct_answers=session.correct_count,
        )


# ============================================================================
# Statistics
# ============================================================================


class ReviewSchedule(BaseModel):
    today: int = 0
    tomorrow: int = 0
    this_week: int = 0
    next_week: int = 0


class LearningStats(BaseModel):
    total_words: int = 0
    unknown_words: int = 0
    learning_words: int = 0
    known_words: int = 0
    total_reviews: int = 0
    average_accuracy: float = 0.0
    words_for_review: int = 0
    review_schedule: ReviewSchedule = Field(default_factory=ReviewSchedule)
