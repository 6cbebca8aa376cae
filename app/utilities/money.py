"""
Currency helpers.

KWD amounts carry 3 decimal places (fils). Every stored amount and every
intermediate ledger sum is quantized the same way so that recomputing a
balance from the same rows always yields the same Decimal.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from app.core.config import settings
from app.logger_config import logger

ZERO = Decimal("0")
KWD_QUANTUM = Decimal(1).scaleb(-settings.CURRENCY_DECIMALS)


def quantize_kwd(value: Decimal) -> Decimal:
    """Round a Decimal to the currency precision (half-up). Never returns -0.000."""
    result = value.quantize(KWD_QUANTUM, rounding=ROUND_HALF_UP)
    # a negated zero amount (e.g. a zero-value return) must render as 0.000
    return result.copy_abs() if result.is_zero() else result


def add_kwd(left: Decimal, right: Decimal) -> Decimal:
    return quantize_kwd(left + right)


def parse_amount(raw: Any, context: Optional[str] = None) -> Decimal:
    """
    Convert a stored amount into a quantized Decimal.

    Values that cannot be read as a finite number (None, empty strings,
    garbage text, NaN, infinity) are logged and treated as zero so that a
    single bad row never prevents a balance from rendering.
    """
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, bool) or raw is None:
        value = None
    else:
        try:
            # str() first so floats keep their printed value
            value = Decimal(str(raw).strip())
        except (InvalidOperation, ValueError):
            value = None

    if value is None or not value.is_finite():
        logger.warning(
            f"Malformed amount {raw!r}{f' in {context}' if context else ''}; treating as zero"
        )
        return quantize_kwd(ZERO)

    return quantize_kwd(value)


def format_kwd(value: Decimal) -> str:
    """Render an amount with exactly the currency's decimal places."""
    return f"{quantize_kwd(value):.{settings.CURRENCY_DECIMALS}f}"
