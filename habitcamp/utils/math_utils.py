# File: utils/math_utils.py
"""Math and calculation utilities for HabitCamp.

Pure Python math functions with no imports from the rest of the package.

⚠️ UTILS PURITY: NO imports from `..const` or `..engines` allowed.

Functions:
    - round_amount: Consistent rounding to configured precision
    - round_half_up: Integer rounding that never rounds half to even
    - apply_multiplier: Multiplier arithmetic with half-up rounding
    - calculate_ratio: Uncapped progress ratio with zero-target protection
    - calculate_percentage: Uncapped progress percentage
    - clamp: Bound a value for display
    - parse_amount: Parse a single user-entered amount (string or number)
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import logging
import math

# Module-level logger (no const import)
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

# Default float precision for amount rounding
DATA_FLOAT_PRECISION = 2


# ==============================================================================
# Amount Arithmetic
# ==============================================================================


def round_amount(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round an amount to the configured precision.

    Prevents float drift when summing many small entries
    (e.g., 0.1 + 0.2 → 0.3 instead of 0.30000000000000004).

    Examples:
        round_amount(10.456) → 10.46
        round_amount(10.0) → 10.0
    """
    return round(value, precision)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's built-in round() uses banker's rounding (round(12.5) == 12);
    escalated targets must round 12.5 up to 13.

    Examples:
        round_half_up(12.5) → 13
        round_half_up(12.4) → 12
        round_half_up(39.0) → 39
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def apply_multiplier(base: float, multiplier: float) -> int:
    """Apply a tier multiplier to a base target.

    Args:
        base: Base target value
        multiplier: Multiplier to apply (e.g., 1.2 for a 20% harder target)

    Returns:
        Product rounded to the nearest integer, half up

    Examples:
        apply_multiplier(10000, 1.2) → 12000
        apply_multiplier(25, 1.5) → 38
    """
    # Multiply in Decimal so 25 * 1.3 lands on 32.5 rather than 32.49999...
    product = Decimal(str(base)) * Decimal(str(multiplier))
    return int(product.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_ratio(current: float, target: float) -> float:
    """Return current/target without capping, or 0.0 when target <= 0.

    Examples:
        calculate_ratio(5, 10) → 0.5
        calculate_ratio(15, 10) → 1.5
        calculate_ratio(5, 0) → 0.0  # Division by zero protection
    """
    if target <= 0:
        return 0.0
    return current / target


def calculate_percentage(
    current: float,
    target: float,
    precision: int | None = DATA_FLOAT_PRECISION,
) -> float:
    """Calculate uncapped progress percentage.

    Rounded to precision, or left exact when precision is None.
    Callers decide whether to clamp for display.

    Examples:
        calculate_percentage(50, 100) → 50.0
        calculate_percentage(1, 3) → 33.33
        calculate_percentage(150, 100) → 150.0
        calculate_percentage(1, 3, precision=None) → 33.333...  # exact ratio
        calculate_percentage(5, 0) → 0.0
    """
    percentage = calculate_ratio(current, target) * 100
    if precision is None:
        return percentage
    return round_amount(percentage, precision)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between minimum and maximum bounds.

    Examples:
        clamp(150, 0, 100) → 100
        clamp(-10, 0, 100) → 0
    """
    return max(min_val, min(value, max_val))


# ==============================================================================
# Amount Parsing
# ==============================================================================


def parse_amount(raw_input: str | float | None) -> float | None:
    """Parse a user-entered amount into a float.

    Accepts numbers and strings, with comma decimal separators
    ("2,5" → 2.5). Returns None for anything that is not a finite number;
    sign is NOT checked here.

    Examples:
        parse_amount("12") → 12.0
        parse_amount("2,5") → 2.5
        parse_amount("abc") → None
        parse_amount(True) → None
    """
    if raw_input is None or isinstance(raw_input, bool):
        return None

    if isinstance(raw_input, (int, float)):
        value = float(raw_input)
    elif isinstance(raw_input, str):
        text = raw_input.strip().replace(",", ".")
        if not text:
            return None
        try:
            value = float(Decimal(text))
        except (InvalidOperation, ValueError):
            _LOGGER.debug("Unparseable amount '%s'", raw_input)
            return None
    else:
        _LOGGER.debug("Unexpected amount type: %s", type(raw_input))
        return None

    if not math.isfinite(value):
        return None
    return value

