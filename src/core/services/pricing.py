"""Pricing engine.

Turns a publisher cost into a quoted price:

    final = round(cost + margin(group, cost) + copy_rate(code) * words, 2)

Margins come in three bands per language group: a flat `low` margin under
300, a flat `mid` margin under 500, and a percentage of the cost from 500 up.
The percentage band can yield a smaller margin than the mid band right below
it (500 * 0.20 = 100 < 107); that drop is part of the price list.

Rounding is ROUND_HALF_UP on `Decimal` values.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

from core.domain.language import normalize_language_code
from core.domain.models import Quote
from core.domain.tables import (
    COPY_RATES,
    LOW_BAND_LIMIT,
    MARGIN_BANDS,
    MID_BAND_LIMIT,
    group_for,
)

_CENT = Decimal("0.01")
_ZERO = Decimal("0")


def _as_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 299.99 exact instead of their binary expansion.
    return Decimal(str(value))


def round_price(value: Decimal) -> Decimal:
    with localcontext() as ctx:
        # quantize needs every integer digit plus two decimals.
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def margin_for(language_code: str, publisher_cost: Decimal | int | float | str) -> Decimal:
    """Margin added on top of `publisher_cost`; 0 for unknown languages."""

    cost = _as_decimal(publisher_cost)
    group = group_for(normalize_language_code(language_code))
    if group is None:
        return _ZERO

    band = MARGIN_BANDS[group]
    if cost < LOW_BAND_LIMIT:
        return band.low
    if cost < MID_BAND_LIMIT:
        return band.mid
    return cost * band.percentage


def copy_rate_for(language_code: str) -> Decimal:
    """Per-word copywriting rate; 0 for unknown languages."""

    return COPY_RATES.get(normalize_language_code(language_code), _ZERO)


def build_quote(
    *,
    domain_name: str,
    language_code: str,
    publisher_cost: Decimal | int | float | str,
    word_count: int = 0,
) -> Quote:
    """Compute the final price and keep every intermediate amount."""

    code = normalize_language_code(language_code)
    cost = _as_decimal(publisher_cost)
    margin = margin_for(code, cost)

    copy_rate = copy_rate_for(code)
    copy_price = copy_rate * word_count if word_count > 0 else _ZERO

    return Quote(
        domain_name=domain_name,
        language_code=code,
        publisher_cost=cost,
        margin=margin,
        word_count=max(word_count, 0),
        copy_rate=copy_rate,
        copy_price=copy_price,
        final_price=round_price(cost + margin + copy_price),
    )


def compute_final_price(
    publisher_cost: Decimal | int | float | str,
    language_code: str,
    word_count: int = 0,
) -> Decimal:
    """Final price rounded half-up to two decimals."""

    quote = build_quote(
        domain_name="-",
        language_code=language_code,
        publisher_cost=publisher_cost,
        word_count=word_count,
    )
    return quote.final_price


def format_price(price: Decimal) -> str:
    """Render a price for chat replies: `467.00` -> `467.0`, `507.25` -> `507.25`."""

    text = f"{round_price(price):.2f}"
    if text.endswith("0"):
        text = text[:-1]
    return text
