"""
Custom exception hierarchy for the application
"""

from typing import Any, Dict, Optional


class ApiError(Exception):
    """
    Error that terminates a request with a JSON error envelope.

    Rendered by the exception handler in main.py as
    {"error": error_code, "message": ..., "details": ...} (None fields dropped).
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message or error_code or self.error_code)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error_code}
        if self.message:
            body["message"] = self.message
        if self.details is not None:
            body["details"] = self.details
        return body


class AuthError(ApiError):
    """Missing, invalid or unverifiable credential"""
    status_code = 401
    error_code = "invalid_token"


class ForbiddenError(AuthError):
    """Authenticated, but lacking the required privilege"""
    status_code = 403
    error_code = "forbidden_admin_only"


class InvalidBodyError(ApiError):
    """Malformed or incomplete request body"""
    status_code = 400
    error_code = "invalid_body"


class ConfigurationError(ApiError):
    """A required external dependency has no credentials configured"""
    status_code = 503
    error_code = "not_configured"


class RAGException(Exception):
    """Base exception for RAG-related errors"""
    pass


class EmbeddingError(RAGException):
    """Error during embedding generation"""
    pass


class StorageError(RAGException):
    """Error during storage operations"""
    pass


class AgenticException(Exception):
    """Base exception for language-model and speech provider errors"""
    pass


class LLMError(AgenticException):
    """Error during LLM operations"""
    pass


class SpeechError(AgenticException):
    """Error during transcription or speech synthesis"""
    pass
