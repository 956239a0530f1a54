# buyer_app/domain/services/fx_service.py
from typing import Optional, Protocol

from buyer_app.domain.entities.money import ExchangeRate, MoneyAmount, PurchaseResult


class FXService(Protocol):
    """
    Contrato del servicio FX externo.

    Toda la lógica de negocio (tasas, libro de caja, liquidación) vive
    del otro lado; la API solo delega aquí.
    """

    def query_rate(self, from_currency: str, to_currency: str) -> Optional[ExchangeRate]:
        ...

    def balance(self) -> MoneyAmount:
        ...

    def self_issue_cash(self, amount: MoneyAmount) -> None:
        ...

    def buy_money_amount(self, amount: MoneyAmount, currency: str) -> PurchaseResult:
        ...
