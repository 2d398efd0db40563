"""
Core math modules — десятичная арифметика произвольной точности

Неизменяемый DecimalValue (unscaled / 10^scale) и stateless операции над
ним с явной политикой округления.
"""

# Errors
from src.core.math.errors import (
    DecimalArithmeticError,
    DecimalSyntaxError,
    DivisionByZero,
    InvalidScale,
    NegativeOperand,
    NonTerminatingDivision,
)

# Rounding Policy
from src.core.math.rounding import (
    DEFAULT_ROUNDING,
    RoundingMode,
    apply_rounding,
    coerce_rounding_mode,
)

# Decimal Value
from src.core.math.decimal_value import (
    ONE,
    TWO,
    ZERO,
    DecimalValue,
    align,
    compare,
    digit_count,
    parse,
    to_text,
    validate_scale,
)

# Arithmetic
from src.core.math.arithmetic import (
    absolute,
    add,
    divide,
    multiply,
    negate,
    set_scale,
    subtract,
)

# Long Division
from src.core.math.long_division import long_divide

# Square Roots
from src.core.math.roots import (
    NEWTON_GUARD_DIGITS,
    NEWTON_MAX_ITERATIONS,
    SQRT_GUARD_DIGITS,
    NewtonSqrtConfig,
    isqrt,
    sqrt,
    sqrt_newton,
)

__all__ = [
    # Errors
    "DecimalArithmeticError",
    "DecimalSyntaxError",
    "DivisionByZero",
    "InvalidScale",
    "NegativeOperand",
    "NonTerminatingDivision",
    # Rounding Policy
    "DEFAULT_ROUNDING",
    "RoundingMode",
    "apply_rounding",
    "coerce_rounding_mode",
    # Decimal Value — Constants
    "ONE",
    "TWO",
    "ZERO",
    # Decimal Value — Types
    "DecimalValue",
    # Decimal Value — Functions
    "align",
    "compare",
    "digit_count",
    "parse",
    "to_text",
    "validate_scale",
    # Arithmetic
    "absolute",
    "add",
    "divide",
    "multiply",
    "negate",
    "set_scale",
    "subtract",
    # Long Division
    "long_divide",
    # Square Roots — Constants
    "NEWTON_GUARD_DIGITS",
    "NEWTON_MAX_ITERATIONS",
    "SQRT_GUARD_DIGITS",
    # Square Roots — Types
    "NewtonSqrtConfig",
    # Square Roots — Functions
    "isqrt",
    "sqrt",
    "sqrt_newton",
]
