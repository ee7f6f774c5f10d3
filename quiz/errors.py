"""Errors raised at the quiz session boundary."""


class QuizError(Exception):
    """Base class for quiz session errors."""


class NoWordsAvailableError(QuizError):
    """The user has no unknown or learning words to quiz on."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(
            f"No words available for quiz for user {user_id}. "
            "Add some words to your learning list first."
        )


class SessionNotFoundError(QuizError):
    """The session ID is not in the active-session table."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Quiz session not found: {session_id}")


class NoCurrentQuestionError(QuizError):
    """An answer was submitted to a session with no question left."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"No current question available in session {session_id}")
