"""
Custom Exception Classes for TalentFit.

Domain errors raised by the matching and notification pipeline, plus
standardized HTTP exceptions used by the API layer.
"""
from fastapi import HTTPException, status


# =============================================================================
# Domain errors
# =============================================================================


class TalentFitError(Exception):
    """Base class for all matching and notification errors."""


class EmptyInputError(TalentFitError):
    """Raised when text submitted for embedding is blank after normalization."""


class InvalidProjectIDError(TalentFitError):
    """Raised when a project id cannot be converted to its native key type."""

    def __init__(self, project_id: object):
        self.project_id = project_id
        super().__init__(f"invalid project ID: {project_id!r}")


class ProjectNotFoundError(TalentFitError):
    """Raised when a project lookup returns nothing."""

    def __init__(self, project_id: int):
        self.project_id = project_id
        super().__init__(f"project not found: {project_id}")


class ProviderError(TalentFitError):
    """Raised when an upstream model provider call fails."""


class CountMismatchError(ProviderError):
    """Raised when a batch embedding call returns the wrong number of vectors."""

    def __init__(self, received: int, expected: int):
        self.received = received
        self.expected = expected
        super().__init__(f"received {received} embeddings but expected {expected}")


class SummarizationError(ProviderError):
    """Raised when project summarization fails or returns no choices."""


class ScoringError(ProviderError):
    """Raised when the LLM scoring call fails or returns no choices."""


class MalformedScoreResponseError(TalentFitError):
    """Raised when the LLM scoring response is not a valid JSON score array."""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)


class VectorStoreError(TalentFitError):
    """Raised when the similarity ranking query fails."""


class ProjectNotEmbeddedError(VectorStoreError):
    """Raised when the target project has no embedding to rank against."""

    def __init__(self, project_id: int):
        self.project_id = project_id
        super().__init__(f"project {project_id} has no embedding")


class NoDestinationError(TalentFitError):
    """Raised when a chat-ops message has neither a recipient nor a default channel."""


# =============================================================================
# HTTP errors
# =============================================================================


class NotFoundError(HTTPException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, id: str = None):
        detail = f"{resource} not found" + (f": {id}" if id else "")
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class AuthorizationError(HTTPException):
    """Exception raised when a user is not authorized to access a resource."""

    def __init__(self, message: str = "Not authorized to access this resource"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=message)

