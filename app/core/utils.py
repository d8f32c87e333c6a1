from decimal import Decimal, ROUND_HALF_UP, localcontext

CENTS = Decimal("0.01")


def quantize_cents(value: Decimal) -> Decimal:
    """
    Rounds a monetary value half-up to two decimal places.
    Precision is widened so amounts of any magnitude keep every integer digit.
    """
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_decimal_br(value: Decimal) -> str:
    """
    Formats a value with a comma as decimal separator and no grouping.
    Example: 1234.5 -> 1234,50
    """
    return f"{quantize_cents(value):f}".replace(".", ",")


def format_brl(value: Decimal) -> str:
    """
    Formats a value as Brazilian Real currency.
    Example: 1234.5 -> R$ 1.234,50
    """
    grouped = f"{quantize_cents(value):,.2f}"
    # Swap US separators for Brazilian ones
    return "R$ " + grouped.replace(",", "_").replace(".", ",").replace("_", ".")
