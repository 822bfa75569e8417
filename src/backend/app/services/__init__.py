"""
Services package
"""

from .doubt_service import DoubtService, serialize_doubt, format_timestamp
from .auth_service import TeacherAuthService
from .validation import (
    ValidationResult,
    validate_doubt_submission,
    validate_answer_submission,
)

__all__ = [
    "DoubtService",
    "serialize_doubt",
    "format_timestamp",
    "TeacherAuthService",
    "ValidationResult",
    "validate_doubt_submission",
    "validate_answer_submission",
]
