"""
Domain exceptions for graphdelta.

Follows the "Fail Fast" principle: errors are raised where they are detected
and propagate to the caller untouched.
All application errors should inherit from GraphDeltaError.
"""


class GraphDeltaError(Exception):
    """Base class for all graphdelta exceptions."""

    def __init__(self, message: str, context: dict = None):
        super().__init__(message)
        self.context = context or {}


class DocumentValidationError(GraphDeltaError):
    """Raised when a JSON-LD document does not have the flattened graph shape."""

    def __init__(self, message: str, side: str, context: dict = None):
        super().__init__(f"Error validating {side} document: {message}", context)
        self.side = side


class DiffContractError(GraphDeltaError):
    """Raised when a difference cannot be recorded for the kind it was classified as."""

    pass


class DocumentLoadError(GraphDeltaError):
    """Raised when a document cannot be read or parsed from disk."""

    pass


class RuleSetError(GraphDeltaError):
    """Raised when a ruleset file is unreadable or a rule is malformed."""

    pass


class ReportError(GraphDeltaError):
    """Raised when report generation fails."""

    pass
