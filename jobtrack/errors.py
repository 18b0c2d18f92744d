"""
JobTrack - Error taxonomy.

Every error raised across the store and API boundary derives from
JobTrackError and carries the HTTP status it maps to.
"""
from typing import Iterable, List, Union


class JobTrackError(Exception):
    """Base class for errors surfaced to API callers."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(JobTrackError):
    """Bad input shape or content. Holds every violated-field message."""
    status_code = 400

    def __init__(self, messages: Union[str, Iterable[str]]):
        if isinstance(messages, str):
            messages = [messages]
        self.messages: List[str] = list(messages)
        super().__init__("; ".join(self.messages))


class NotFound(JobTrackError):
    status_code = 404

    def __init__(self, message: str = "Job not found"):
        super().__init__(message)


class PersistenceError(JobTrackError):
    """The jobs document could not be read or written."""
    status_code = 500


class AIServiceError(Exception):
    """AI provider call failed. Absorbed by the analyzer, never surfaced."""
    pass

