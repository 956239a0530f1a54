# buyer_app/domain/entities/money.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class MoneyAmount:
    quantity: Decimal
    currency: str

    def __str__(self) -> str:
        return f"{self.quantity} {self.currency}"


@dataclass(frozen=True)
class ExchangeRate:
    """1 unidad de from_currency equivale a `value` unidades de to_currency."""

    from_currency: str
    to_currency: str
    value: Decimal


@dataclass(frozen=True)
class PurchaseResult:
    missing_amount: Optional[MoneyAmount] = None

    @property
    def fully_funded(self) -> bool:
        return self.missing_amount is None
