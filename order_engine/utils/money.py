from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_CENT = Decimal("0.01")


def price_to_cents(price: Decimal | float | int | str) -> int:
    """Converte um preço decimal (ex: 12.9) em centavos inteiros (1290).

    Floats passam por ``str`` antes de virar ``Decimal`` para não herdar o
    erro binário (``12.9`` vira ``Decimal("12.9")``, não ``12.8999...``).
    """
    if isinstance(price, float):
        price = str(price)
    try:
        value = Decimal(price)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid price: {price!r}") from exc
    return int((value.quantize(_CENT, rounding=ROUND_HALF_UP) * 100).to_integral_value())


def cents_to_price(cents: int) -> Decimal:
    return (Decimal(int(cents)) / 100).quantize(_CENT)


def format_cents(cents: int, currency: str = "R$") -> str:
    value = cents_to_price(cents)
    sign = "-" if value < 0 else ""
    integer_part, decimal_part = f"{abs(value):.2f}".split(".")
    grouped = f"{int(integer_part):,}".replace(",", ".")
    return f"{sign}{currency} {grouped},{decimal_part}"
