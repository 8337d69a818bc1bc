from __future__ import annotations

from decimal import (
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
)
from typing import Any

# Must hold a u128 balance (39 digits) times a fractional price without rounding.
VORTEX_PRECISION = 80

VORTEX_CONTEXT = Context(
    prec=VORTEX_PRECISION,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


def to_decimal(value: Any, *, field: str = "value") -> Decimal:
    """Convert a raw chain or database number to a non-negative ``Decimal``.

    Args:
        value: An ``int``, ``Decimal``, ``float`` (as stored by MongoDB), or a
            numeric string. Strings prefixed with ``0x`` are read as hex, the
            way Substrate RPC renders large balances.
        field: Name used in error messages.

    Returns:
        The value as a ``Decimal``.

    Raises:
        ValueError: If the value is missing, not numeric, not finite or negative.

    Notes:
        - Floats go through ``repr`` so ``0.1`` becomes ``Decimal("0.1")``
          rather than its binary expansion.
        - Booleans are rejected even though they are ``int`` subclasses.
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"{field} must be numeric, got {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        try:
            if text.lower().startswith("0x"):
                result = Decimal(int(text, 16))
            else:
                result = Decimal(text)
        except (InvalidOperation, ValueError) as e:
            raise ValueError(f"{field} is not a number: {value!r}") from e
    else:
        raise ValueError(
            f"{field} must be numeric, got {type(value).__name__}: {value!r}"
        )

    if not result.is_finite():
        raise ValueError(f"{field} must be finite, got {value!r}")
    if result < 0:
        raise ValueError(f"{field} must be non-negative, got {value!r}")
    return result


def to_asset_id(value: Any, *, field: str = "assetId") -> int:
    """Convert a raw asset identifier to ``int``."""
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"{field} must be an integer, got {value!r}")
