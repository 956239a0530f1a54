# buyer_app/schemas/fx_schemas.py
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator

from buyer_app.domain.codec import digit_counts
from buyer_app.domain.currencies import minor_units, parse_currency_code
from buyer_app.domain.entities.money import MoneyAmount

# Tope de la parte entera; con las unidades menores cabe en el contexto decimal por defecto
MAX_INTEGER_DIGITS = 15


class MoneyAmountIn(BaseModel):
    quantity: Decimal = Field(..., gt=0, examples=["100.00"])
    currency: str = Field(..., examples=["USD"])

    @field_validator("quantity", mode="before")
    @classmethod
    def _no_bool(cls, v):
        if isinstance(v, bool):
            raise ValueError("quantity must be a decimal number")
        return v

    @field_validator("currency")
    @classmethod
    def _currency(cls, v: str) -> str:
        return parse_currency_code(v)

    @model_validator(mode="after")
    def _scale(self) -> "MoneyAmountIn":
        if not self.quantity.is_finite():
            raise ValueError("quantity must be a finite decimal number")
        decimals = minor_units(self.currency)
        enteros, fraccion = digit_counts(self.quantity)
        if enteros > MAX_INTEGER_DIGITS:
            raise ValueError(f"quantity allows at most {MAX_INTEGER_DIGITS} integer digits")
        if fraccion > decimals:
            raise ValueError(
                f"{self.currency} amounts allow at most {decimals} decimal places"
            )
        return self

    def to_domain(self) -> MoneyAmount:
        return MoneyAmount(quantity=self.quantity, currency=self.currency)


class CashIssuanceRequest(BaseModel):
    amount: MoneyAmountIn


class PurchaseRequest(BaseModel):
    amount: MoneyAmountIn
    currency: str = Field(..., examples=["GBP"])

    @field_validator("currency")
    @classmethod
    def _currency(cls, v: str) -> str:
        return parse_currency_code(v)
