"""Pure Python utilities for HabitCamp.

⚠️ UTILS PURITY: nothing in this package imports `..const` or `..engines`.

Submodules:
    - dt_utils: Date parsing, day arithmetic, window bounds
    - math_utils: Amount rounding, multiplier arithmetic, progress ratios

Usage:
    from . import dt_utils
    from .math_utils import round_amount
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
