from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from config import Config

CENTS = Decimal("0.01")

SPECIES_EMOJI = {
    "dog": "\U0001F436",
    "cat": "\U0001F431",
    "rabbit": "\U0001F430",
    "bird": "\U0001F426",
}
DEFAULT_EMOJI = "\U0001F43E"


def safe_int(s: Any, default: Optional[int] = 0) -> Optional[int]:
    try:
        return int(str(s).strip())
    except Exception:
        return default


def safe_decimal(s: Any, default: Optional[Decimal] = None) -> Optional[Decimal]:
    try:
        d = Decimal(str(s).strip())
    except (InvalidOperation, ValueError):
        return default
    if not d.is_finite():
        return default
    return d


def to_decimal(value: Any) -> Decimal:
    # REAL columns come back as float; go through str to keep 25.5 as 25.50
    d = value if isinstance(value, Decimal) else Decimal(str(value or 0))
    try:
        return d.quantize(CENTS)
    except InvalidOperation:
        # infinite, or more digits than the context holds
        return d


def format_money(value: Any, *, decimals: int = 2, symbol: str = "") -> str:
    """
    Format an amount with comma grouping and a fixed number of decimals.
    """
    try:
        return f"{symbol}{Decimal(str(value)):,.{int(decimals)}f}"
    except (InvalidOperation, ValueError):
        return str(value)


def price_str(value: Any) -> str:
    return format_money(value, symbol=Config.CURRENCY)


def species_emoji(species: str) -> str:
    return SPECIES_EMOJI.get((species or "").strip().lower(), DEFAULT_EMOJI)
