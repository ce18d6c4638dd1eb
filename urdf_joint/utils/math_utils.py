"""Numeric text conversion helpers for robot description attributes.

Provides locale-independent decimal parsing, 3-vector parsing and the float
formatting used when writing URDF attributes back out.
"""

import math
import re
from typing import Optional, Sequence, Tuple

import numpy as np

Vector3 = Tuple[float, float, float]

# Plain ASCII decimal with optional exponent; no inf/nan, hex, digit
# separators or non-ASCII digits.
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def str_to_double(text: str) -> float:
    """Convert decimal text to a float independently of the process locale.

    Args:
        text: The attribute text, e.g. ``"-1.5e-3"``. Surrounding whitespace is ignored.

    Returns:
        The parsed value.

    Raises:
        ValueError: If the text is not a plain decimal number.
    """
    stripped = text.strip()
    if not _DECIMAL_RE.fullmatch(stripped):
        raise ValueError(f"'{text}' is not a valid decimal number.")
    return float(stripped)


def str_to_vector3(text: str) -> Vector3:
    """Parse a whitespace-separated triple such as ``"0 0 1"``."""
    pieces = text.split()
    if len(pieces) != 3:
        raise ValueError(
            f"Parser found {len(pieces)} elements in '{text}' but 3 expected."
        )
    x, y, z = (str_to_double(piece) for piece in pieces)
    return (x, y, z)


def round_to_sig_digits(x: float, digits: int):
    """Round a floating-point number to a specified number of significant digits.

    Args:
        x: The number to be rounded.
        digits: The number of significant digits to round to.

    Returns:
        The number rounded to the specified number of significant digits.
    """
    if x == 0.0:
        return 0.0  # Zero is zero in any significant figure
    return round(x, digits - int(math.floor(math.log10(abs(x)))) - 1)


def value_to_string(value: float, digits: Optional[int] = None) -> str:
    """Format a float for an XML attribute.

    ``repr`` precision is used unless ``digits`` asks for rounding, so a
    written value parses back to the same float.
    """
    value = float(value)
    if digits is not None:
        value = round_to_sig_digits(value, digits)
    return repr(value)


def vector_to_string(vec: Sequence[float] | np.ndarray, digits: Optional[int] = None) -> str:
    """Convert a vector to a space-separated string."""
    return " ".join(value_to_string(item, digits) for item in vec)
