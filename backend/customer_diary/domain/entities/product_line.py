"""Domain entity for a product line attached to a diary."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

_CENTS = Decimal("0.01")


@dataclass
class ProductLine:
    """One ordered product: quantity times unit price gives the line total."""

    name: str
    qty: int
    unit_price: Decimal
    id: str | None = None
    diary_id: str | None = None
    upc: str | None = None
    line_total: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if self.qty <= 0:
            raise ValueError("qty must be positive")
        if self.unit_price < 0:
            raise ValueError("unit_price cannot be negative")
        self.line_total = (self.unit_price * self.qty).quantize(
            _CENTS, rounding=ROUND_HALF_UP
        )
