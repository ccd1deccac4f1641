from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

# DECIMAL(7,2)
HOURS_PRECISION = 7
HOURS_SCALE = 2
_QUANT = Decimal("0." + "0" * HOURS_SCALE)
_LIMIT = Decimal(10) ** (HOURS_PRECISION - HOURS_SCALE)


def round_hours(value) -> Decimal:
    """Quantize an hour (or cost) amount to 2 places, rounding half up.

    Accepts Decimal, int, float or a numeric string. Floats go through str()
    so 1.1 becomes Decimal("1.10") rather than its binary expansion. Amounts
    that do not fit DECIMAL(7,2) after rounding raise InvalidOperation.
    """
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, float):
        d = Decimal(str(value))
    else:
        d = Decimal(str(value).strip())
    if not d.is_finite():
        raise InvalidOperation(f"non-finite amount: {value!r}")
    d = d.quantize(_QUANT, rounding=ROUND_HALF_UP)
    if abs(d) >= _LIMIT:
        raise InvalidOperation(f"amount out of range for DECIMAL({HOURS_PRECISION},{HOURS_SCALE}): {value!r}")
    return d


def round_optional_hours(value) -> Decimal | None:
    return None if value is None else round_hours(value)
