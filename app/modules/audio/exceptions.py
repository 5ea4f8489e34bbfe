"""Audio domain specific exceptions."""

from app.core.errors import AppError, AuthorizationError, NotFoundError, ValidationFailedError


class AudioError(AppError):
    """Base class for audio domain errors."""


class InvalidAudioUploadError(AudioError, ValidationFailedError):
    """Raised when an upload or a query carries invalid input."""


class AudioFileNotFoundError(AudioError, NotFoundError):
    """Raised when no audio record matches the identifier."""

    error = "Audio file not found"


class AudioAccessDeniedError(AudioError, AuthorizationError):
    """Raised when the caller does not own the audio record."""


class AudioOwnerNotFoundError(AudioError, NotFoundError):
    """Raised when the uploading account no longer exists."""

    error = "User not found"
