"""
Domain exceptions for ProjectLens.

Only invalid input arguments and broken configuration are raised.
Data-quality problems inside a project become diagnostics instead.
All application errors should inherit from ProjectLensError.
"""


class ProjectLensError(Exception):
    """Base class for all ProjectLens exceptions."""

    def __init__(self, message: str, context: dict = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class InvalidInputError(ProjectLensError):
    """Raised when an analysis is requested with invalid arguments (e.g. missing root)."""

    pass


class ConfigurationError(ProjectLensError):
    """Raised when configuration or heuristics overrides are invalid or unreadable."""

    pass
