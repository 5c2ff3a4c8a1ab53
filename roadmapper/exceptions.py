"""
Custom exceptions for the Roadmapper application.
"""


class RoadmapperError(Exception):
    """Base exception for all Roadmapper-related errors."""
    pass


class ValidationError(RoadmapperError):
    """Raised when validation fails for a roadmap or operation."""
    pass


class NotFoundError(RoadmapperError):
    """Raised when a requested roadmap is not found."""
    pass


class InvalidOperationError(RoadmapperError):
    """Raised when an operation is not allowed in the current state."""
    pass


class StorageError(RoadmapperError):
    """Raised when reading or writing a data file fails."""
    pass
