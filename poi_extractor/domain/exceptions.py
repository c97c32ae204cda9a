"""Domain semantic exceptions."""


class DomainError(Exception):
    """Base domain exception."""


class ConfigValidationError(DomainError):
    """Raised when an extractor configuration update is rejected."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"[{key}] {message}")
