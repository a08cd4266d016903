"""
Custom Exceptions - Maturity Decision Engine
maturity_engine/core/exceptions.py

Custom exception classes for engine preconditions and configuration.
"""


class MaturityEngineException(Exception):
    """Base exception for engine operations."""

    pass


class ValidationException(MaturityEngineException, ValueError):
    """Input failed a hard precondition."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class InvalidTargetException(ValidationException):
    """Target maturity is below current maturity."""

    def __init__(self, dimension: str, current: float, target: float):
        self.dimension = dimension
        self.current = current
        self.target = target
        super().__init__(
            f"target_{dimension}_maturity",
            f"target ({target}) must be >= current ({current})",
        )


class MissingInputException(MaturityEngineException):
    """A required input for a sub-calculation was not supplied."""

    def __init__(self, message: str = "Required input missing"):
        self.message = message
        super().__init__(message)


class RuleTableException(MaturityEngineException):
    """Classification rule table could not be loaded or validated."""

    def __init__(self, source: str, message: str = "Invalid rule table"):
        self.source = source
        self.message = message
        super().__init__(f"{message} ({source})")
