"""Arbitrary-precision base conversion.

Python integers have unbounded precision, but ``str(int)`` refuses very long
decimal renderings and ``format`` only knows bases 2, 8, 10 and 16. The
powers searched here grow without limit, so rendering goes through
:func:`to_base_string`, which works for any supported base and any
magnitude by splitting the value on cached powers of the base.
"""

from __future__ import annotations

import math

from apocalypse_search.errors import InvalidParameterError

MIN_BASE = 2
MAX_BASE = 62

# Numeral alphabets: lower case letters up to base 36, then upper case first.
_NUMERALS_36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_NUMERALS_62 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

_FORMAT_CODES = {2: "b", 8: "o", 16: "x"}

# Leaf chunks are converted with plain divmod on values below 2**60.
_LEAF_BITS = 60


def validate_base(base: int) -> int:
    """Check that ``base`` is a supported number base.

    Raises:
        InvalidParameterError: If base is outside [2, 62].
    """
    if not isinstance(base, int) or isinstance(base, bool):
        raise InvalidParameterError(f"base must be an integer, got {base!r}")
    if base < MIN_BASE or base > MAX_BASE:
        raise InvalidParameterError(
            f"base must be between {MIN_BASE} and {MAX_BASE}, got {base}"
        )
    return base


def numerals(base: int) -> str:
    """Return the numeral alphabet used for ``base``, in digit-value order."""
    validate_base(base)
    if base <= 36:
        return _NUMERALS_36[:base]
    return _NUMERALS_62[:base]


def _leaf_size(base: int) -> int:
    return max(1, int(_LEAF_BITS / math.log2(base)))


def _render_small(value: int, base: int, alphabet: str, width: int) -> str:
    if value == 0:
        return "0" * width if width else "0"
    chars = []
    while value:
        value, digit = divmod(value, base)
        chars.append(alphabet[digit])
    text = "".join(reversed(chars))
    if width:
        return text.rjust(width, "0")
    return text


def to_base_string(value: int, base: int = 10, pad: int = 0) -> str:
    """Render a non-negative integer in the given base.

    Args:
        value: Integer of any magnitude, must be >= 0.
        base: Number base in [2, 62].
        pad: Minimum length; shorter renderings are left-padded with zeros.

    Returns:
        Digit string using the alphabet from :func:`numerals`.

    Raises:
        InvalidParameterError: If value is negative or base unsupported.
    """
    validate_base(base)
    if value < 0:
        raise InvalidParameterError(f"value must be non-negative, got {value}")

    if base in _FORMAT_CODES:
        text = format(value, _FORMAT_CODES[base])
        return text.rjust(pad, "0") if pad else text

    alphabet = numerals(base)
    leaf = _leaf_size(base)
    leaf_power = base ** leaf

    if value < leaf_power:
        return _render_small(value, base, alphabet, pad)

    # powers[i] == base ** (leaf * 2**i); the last one squared exceeds value.
    powers = [leaf_power]
    while powers[-1] * powers[-1] <= value:
        powers.append(powers[-1] * powers[-1])

    def convert(v: int, level: int, width: int) -> str:
        if level < 0:
            return _render_small(v, base, alphabet, width)
        chunk = leaf << level
        high, low = divmod(v, powers[level])
        if high == 0 and width <= chunk:
            return convert(low, level - 1, width)
        return convert(high, level - 1, max(width - chunk, 0)) + convert(low, level - 1, chunk)

    return convert(value, len(powers) - 1, pad)

