"""Exceptions raised by the career agent and its collaborators."""


class CareerGuideError(Exception):
    """Base class for all careerguide errors."""


class CompletionError(CareerGuideError):
    """The completion service could not produce a reply."""


class ConfigurationError(CompletionError):
    """No usable credential or endpoint for the active provider."""


class TransportError(CompletionError):
    """Network failure, timeout, non-2xx status or malformed response."""

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class InputError(CareerGuideError):
    """Empty or whitespace-only user input."""


class DocumentError(CareerGuideError):
    """A document could not be turned into text."""
