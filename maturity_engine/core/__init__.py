"""
Core Package - Maturity Decision Engine
maturity_engine/core/__init__.py

Core infrastructure: exceptions.
"""

from maturity_engine.core.exceptions import (
    InvalidTargetException,
    MaturityEngineException,
    MissingInputException,
    RuleTableException,
    ValidationException,
)

__all__ = [
    "InvalidTargetException",
    "MaturityEngineException",
    "MissingInputException",
    "RuleTableException",
    "ValidationException",
]
