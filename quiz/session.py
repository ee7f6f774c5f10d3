"""Quiz session lifecycle.

A session is built in one call to ``start_session``, stays active while
answers arrive, and is evicted from the active table by the answer that
completes it. Only its results summary outlives it.
"""

import logging
import random
from collections import OrderedDict
from datetime import datetime

from config import QuizConfig
from models import (
    AnswerResult,
    LearningSessionRecord,
    QuizAnswer,
    QuizQuestion,
    QuizSession,
    SessionResults,
    VocabularyEntry,
    WordStatus,
)
from quiz.errors import (
    NoCurrentQuestionError,
    NoWordsAvailableError,
    SessionNotFoundError,
)
from quiz.generator import QuestionGenerator
from quiz.mastery import MasteryUpdater
from quiz.scorer import get_answer_explanation, score_answer
from storage.base import LearningSessionRepository, WordRepository

logger = logging.getLogger(__name__)


class SessionStore:
    """The active-session table, plus results of recently finished sessions."""

    def __init__(self, finished_results_limit: int = 100):
        self.finished_results_limit = finished_results_limit
        self._active: dict[str, QuizSession] = {}
        self._finished: OrderedDict[str, SessionResults] = OrderedDict()

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._active

    def __len__(self) -> int:
        return len(self._active)

    def add(self, session: QuizSession) -> None:
        self._active[session.session_id] = session

    def get(self, session_id: str) -> QuizSession | None:
        return self._active.get(session_id)

    def finish(self, session: QuizSession) -> SessionResults:
        """Evict a completed session and keep its results."""
        self._active.pop(session.session_id, None)
        results = session.results()
        if self.finished_results_limit > 0:
            self._finished[session.session_id] = results
            while len(self._finished) > self.finished_results_limit:
                self._finished.popitem(last=False)
        return results

    def get_results(self, session_id: str) -> SessionResults | None:
        session = self._active.get(session_id)
        if session is not None:
            return session.results()
        return self._finished.get(session_id)


class QuizSessionManager:
    """Owns quiz sessions from start to completion."""

    def __init__(
        self,
        word_repo: WordRepository,
        store: SessionStore | None = None,
        rng: random.Random | None = None,
        generator: QuestionGenerator | None = None,
        mastery_updater: MasteryUpdater | None = None,
        session_repo: LearningSessionRepository | None = None,
        config: QuizConfig | None = None,
    ):
        self.config = config or QuizConfig()
        self.word_repo = word_repo
        self.store = store or SessionStore(self.config.finished_results_limit)
        self.rng = rng or random.Random()
        self.generator = generator or QuestionGenerator(self.rng)
        self.mastery_updater = mastery_updater or MasteryUpdater(word_repo)
        self.session_repo = session_repo

    def start_session(
        self, user_id: str, question_count: int | None = None
    ) -> QuizSession:
        """Build and register a new session for a user.

        Args:
            user_id: The quizzed user.
            question_count: Requested number of questions; defaults to the
                configured count.

        Returns:
            The new session, including all of its questions.

        Raises:
            ValueError: If question_count is not a positive integer.
            NoWordsAvailableError: If the user has no unknown or learning words.
        """
        if question_count is None:
            question_count = self.config.default_question_count
        if (
            isinstance(question_count, bool)
            or not isinstance(question_count, int)
            or question_count < 1
        ):
            raise ValueError(
                f"question_count must be a positive integer, got {question_count!r}"
            )

        entries = self.word_repo.get_entries_for_user(user_id)
        pool = [entry for entry in entries if entry.is_quiz_eligible]
        logger.info(
            "Starting quiz for user %s: %d words, %d eligible",
            user_id,
            len(entries),
            len(pool),
        )
        if not pool:
            raise NoWordsAvailableError(user_id)

        self.rng.shuffle(pool)
        selected = pool[:question_count]

        if self.config.reinject_known_words and len(selected) < question_count:
            selected.extend(self._pick_known_words(entries, question_count, len(selected)))

        questions = [self.generator.generate_question(entry) for entry in selected]
        session = QuizSession(user_id=user_id, questions=questions)
        self.store.add(session)

        logger.info(
            "Quiz session %s started with %d questions",
            session.session_id,
            session.total_questions,
        )
        return session

    def _pick_known_words(
        self, entries: list[VocabularyEntry], question_count: int, filled: int
    ) -> list[VocabularyEntry]:
        known = [entry for entry in entries if entry.status == WordStatus.KNOWN]
        self.rng.shuffle(known)
        limit = min(2, question_count // 4, question_count - filled)
        return known[:limit]

    def _get_session(self, session_id: str) -> QuizSession:
        session = self.store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def get_current_question(self, session_id: str) -> QuizQuestion | None:
        """Return the question awaiting an answer, or None if complete.

        Raises:
            SessionNotFoundError: If the session is not active.
        """
        return self._get_session(session_id).current_question

    def submit_answer(
        self,
        session_id: str,
        answer_text: str,
        response_time_ms: int | None = None,
    ) -> AnswerResult:
        """Score an answer, update mastery and advance the session.

        Raises:
            SessionNotFoundError: If the session is not active.
            NoCurrentQuestionError: If every question was already answered.
        """
        session = self._get_session(session_id)
        question = session.current_question
        if question is None:
            raise NoCurrentQuestionError(session_id)

        is_correct = score_answer(question, answer_text)

        warnings = []
        warning = self.mastery_updater.record_answer(
            question.entry.id, is_correct, response_time_ms
        )
        if warning:
            warnings.append(warning)

        session.record(
            QuizAnswer(
                question_id=question.id,
                answer_text=answer_text,
                is_correct=is_correct,
                response_time_ms=response_time_ms,
            )
        )

        results = None
        if session.is_complete:
            session.completed_at = datetime.now()
            results = self.store.finish(session)
            warning = self._save_learning_session(session)
            if warning:
                warnings.append(warning)
            logger.info(
                "Quiz session %s completed: %d/%d correct",
                session_id,
                results.correct_answers,
                results.total_questions,
            )

        return AnswerResult(
            is_correct=is_correct,
            correct_answer=question.correct_answer,
            explanation=get_answer_explanation(question, is_correct),
            next_question=session.current_question,
            session_completed=session.is_complete,
            results=results,
            warnings=warnings,
        )

    def get_session_results(self, session_id: str) -> SessionResults | None:
        """Results of an active or recently completed session, else None."""
        return self.store.get_results(session_id)

    def _save_learning_session(self, session: QuizSession) -> str | None:
        if self.session_repo is None:
            return None
        try:
            self.session_repo.save_session(LearningSessionRecord.from_session(session))
        except Exception as e:
            logger.error("Failed to save learning session %s: %s", session.session_id, e)
            return f"Session history was not saved: {e}"
        return None
