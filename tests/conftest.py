"""
Fixtures compartidos: un servicio FX en memoria y el cliente de pruebas.
"""
from decimal import Decimal
from typing import Dict, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from buyer_app.core.config import Settings
from buyer_app.core.errors import InvalidArgumentError
from buyer_app.domain.entities.money import ExchangeRate, MoneyAmount, PurchaseResult
from buyer_app.main import create_app


class FakeFXService:
    """Servicio FX mínimo: un saldo en una moneda y una tabla de tasas."""

    def __init__(self, balance: MoneyAmount, rates: Dict[Tuple[str, str], Decimal]):
        self._balance = balance
        self._rates = rates
        self.error: Optional[Exception] = None
        self.issued = []
        self.closed = False

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    def query_rate(self, from_currency: str, to_currency: str) -> Optional[ExchangeRate]:
        self._check()
        value = self._rates.get((from_currency, to_currency))
        if value is None:
            return None
        return ExchangeRate(from_currency, to_currency, value)

    def balance(self) -> MoneyAmount:
        self._check()
        return self._balance

    def self_issue_cash(self, amount: MoneyAmount) -> None:
        self._check()
        if amount.currency != self._balance.currency:
            raise InvalidArgumentError(f"Cannot issue {amount.currency} cash.")
        self.issued.append(amount)
        self._balance = MoneyAmount(self._balance.quantity + amount.quantity, amount.currency)

    def buy_money_amount(self, amount: MoneyAmount, currency: str) -> PurchaseResult:
        self._check()
        if currency != self._balance.currency:
            raise InvalidArgumentError(f"No {currency} funds available.")
        if amount.currency == currency:
            rate = Decimal(1)
        else:
            rate = self._rates.get((amount.currency, currency))
            if rate is None:
                raise InvalidArgumentError(f"No exchange rate from {amount.currency} to {currency}.")
        cost = amount.quantity * rate
        if cost > self._balance.quantity:
            return PurchaseResult(MoneyAmount(cost - self._balance.quantity, currency))
        self._balance = MoneyAmount(self._balance.quantity - cost, currency)
        return PurchaseResult()

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fx_service():
    return FakeFXService(
        balance=MoneyAmount(Decimal("100"), "USD"),
        rates={
            ("GBP", "USD"): Decimal("1.25"),
            ("USD", "GBP"): Decimal("0.8"),
        },
    )


@pytest.fixture
def test_settings():
    return Settings(RATE_LIMIT_ENABLED=False, LOG_LEVEL="DEBUG")


@pytest.fixture
def client(fx_service, test_settings):
    app = create_app(fx_service=fx_service, settings=test_settings)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
