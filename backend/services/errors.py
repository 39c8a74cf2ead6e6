"""Error taxonomy for the review session and the AI gateway.

Every error carries the HTTP status the API answers with; ``main.py``
registers a single handler for ``ReviewError``.
"""


class ReviewError(Exception):
    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class GatewayError(ReviewError):
    """The AI service call failed or produced an unusable payload."""
    status_code = 502


class ParseError(GatewayError):
    pass


class AnalysisError(GatewayError):
    pass


class RewriteError(GatewayError):
    pass


class GatewayNotConfiguredError(ReviewError):
    status_code = 503

    def __init__(self, message: str = "Gemini API key is not configured") -> None:
        super().__init__(message)


class UnsupportedFileTypeError(ReviewError):
    status_code = 415

    def __init__(self, mime_type: str) -> None:
        super().__init__(f"Unsupported file type: {mime_type or 'unknown'}. Upload a PDF, DOCX or TXT file.")
        self.mime_type = mime_type


class PhaseConflictError(ReviewError):
    """The intent is not valid in the session's current phase."""
    status_code = 409


class RewritePendingError(PhaseConflictError):
    def __init__(self, experience_id: str, bullet_index: int) -> None:
        super().__init__(f"Bullet {bullet_index} of {experience_id} is already being rewritten")


class SessionNotFoundError(ReviewError):
    status_code = 404

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session not found: {session_id}")


class BulletNotFoundError(ReviewError):
    status_code = 404


class InvalidResumeError(ReviewError):
    status_code = 400
