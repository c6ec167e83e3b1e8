from __future__ import annotations

DEFAULT_TOPIC_REJECTION = (
    "The topic is not related to the property industry or is too vague. "
    "Please provide a specific property industry topic."
)


class QuizPipelineError(Exception):
    """Base class for failures that end a quiz generation request."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TopicRejectedError(QuizPipelineError):
    """Raised when the topic gate classifies a topic as off-domain or too vague."""

    def __init__(self, reason: str | None = None):
        super().__init__(reason or DEFAULT_TOPIC_REJECTION)


class QuizGenerationError(QuizPipelineError):
    """Raised when the model's quiz output cannot be parsed or fails validation."""


class QuizNotFoundError(Exception):
    """Raised when a quiz id is not in the store."""

    def __init__(self, quiz_id: str):
        super().__init__(quiz_id)
        self.quiz_id = quiz_id
