"""
Contract Validation Module

Модуль для валидации JSON контрактов, передаваемых слою представления.
"""

from .validators import (
    ContractValidator,
    DigitPresentationValidator,
    PiTableValidator,
    SchemaLoader,
    validate_digit_presentation,
    validate_pi_table,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PiTableValidator",
    "DigitPresentationValidator",
    # Functions
    "validate_pi_table",
    "validate_digit_presentation",
]
