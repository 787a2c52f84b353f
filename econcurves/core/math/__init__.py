"""
Core math modules для econcurves

Численные примитивы и алгоритмы с гарантией стабильности.
"""

# Numerical Safeguards
from econcurves.core.math.numerical_safeguards import (
    CLAMP_LIMIT,
    clamp,
    is_valid_float,
    safe,
    sign,
)

# Numeric Methods
from econcurves.core.math.numeric_methods import (
    DERIVATIVE_STEP,
    INTEGRATION_STEPS,
    ROOT_MAX_ITERATIONS,
    ROOT_SCAN_SAMPLES,
    ROOT_TOLERANCE,
    Function,
    derivative,
    evaluate_safe,
    find_root,
    find_roots,
    integrate,
)

__all__ = [
    # Numerical Safeguards
    "CLAMP_LIMIT",
    "clamp",
    "is_valid_float",
    "safe",
    "sign",
    # Numeric Methods — Constants
    "DERIVATIVE_STEP",
    "INTEGRATION_STEPS",
    "ROOT_MAX_ITERATIONS",
    "ROOT_SCAN_SAMPLES",
    "ROOT_TOLERANCE",
    # Numeric Methods — Types
    "Function",
    # Numeric Methods — Functions
    "derivative",
    "evaluate_safe",
    "find_root",
    "find_roots",
    "integrate",
]
