"""Domain services: pure logic with no infrastructure dependencies."""

from .error_classifier import classify_error, error_for_code

__all__ = [
    "classify_error",
    "error_for_code",
]
