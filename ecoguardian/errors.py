from enum import Enum


class RemoteFailure(str, Enum):
    """Closed classification of completion-service failures."""

    RATE_LIMITED = "rate_limited"
    OTHER = "other"


class CompletionError(Exception):
    def __init__(self, kind: RemoteFailure, message: str = "Completion request failed"):
        super().__init__(message)
        self.kind = kind

    @property
    def rate_limited(self) -> bool:
        return self.kind is RemoteFailure.RATE_LIMITED


class AIRequestFailed(Exception):
    """A remote AI call failed and no local fallback applies."""

    def __init__(self, detail: str = "Failed to get AI response"):
        super().__init__(detail)
        self.detail = detail
