class SalesAnalysisError(Exception):
    """Base class for failures that abort a sales analysis."""


class ValidationError(SalesAnalysisError):
    """Input dataset is missing, malformed or has an empty collection."""


class ConfigurationError(SalesAnalysisError):
    """A required calculation strategy is missing or misbehaves."""


class MissingReferenceError(SalesAnalysisError):
    """A purchase record points at a seller or product that does not exist."""

    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind.capitalize()} '{key}' not found")
