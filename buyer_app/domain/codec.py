# buyer_app/domain/codec.py
"""
Serialización JSON compartida entre la API y el cliente del nodo FX.

Las cantidades viajan como strings decimales para no perder precisión.
"""
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any, Dict, Optional, Tuple

from buyer_app.core.errors import InvalidArgumentError
from buyer_app.domain.currencies import minor_units, parse_currency_code
from buyer_app.domain.entities.money import ExchangeRate, MoneyAmount


def message(text: str) -> Dict[str, str]:
    return {"message": text}


def parse_decimal(raw: Any, field: str = "quantity") -> Decimal:
    if raw is None or isinstance(raw, bool):
        raise InvalidArgumentError(f"Missing or invalid '{field}'.")
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        raise InvalidArgumentError(f"Invalid decimal value for '{field}': {raw!r}.")
    if not value.is_finite():
        raise InvalidArgumentError(f"Invalid decimal value for '{field}': {raw!r}.")
    return value


def digit_counts(value: Decimal) -> Tuple[int, int]:
    """
    (dígitos enteros, dígitos fraccionarios) sin ceros a la derecha.

    Se calcula sobre as_tuple() para no pasar por el contexto decimal,
    que redondea a 28 dígitos.
    """
    _, digits, exponent = value.as_tuple()
    digits = list(digits)
    while exponent < 0 and digits and digits[-1] == 0:
        digits.pop()
        exponent += 1
    while digits and digits[0] == 0:
        digits.pop(0)
    if not digits:
        return 0, 0
    fraccion = -exponent if exponent < 0 else 0
    enteros = max(len(digits) + exponent, 0)
    return enteros, fraccion


def format_quantity(amount: MoneyAmount) -> str:
    decimals = minor_units(amount.currency)
    enteros, _ = digit_counts(amount.quantity)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, enteros + decimals + 1)
        return str(amount.quantity.quantize(Decimal(1).scaleb(-decimals)))


def format_money(amount: MoneyAmount) -> str:
    return f"{format_quantity(amount)} {amount.currency}"


def money_to_json(amount: MoneyAmount) -> Dict[str, str]:
    return {"quantity": format_quantity(amount), "currency": amount.currency}


def money_from_json(data: Optional[Dict[str, Any]]) -> MoneyAmount:
    if not isinstance(data, dict):
        raise InvalidArgumentError("Money amount must be a JSON object.")
    currency = parse_currency_code(data.get("currency"))
    quantity = parse_decimal(data.get("quantity"))
    return MoneyAmount(quantity=quantity, currency=currency)


def rate_to_json(rate: ExchangeRate) -> Dict[str, str]:
    return {
        "from": rate.from_currency,
        "to": rate.to_currency,
        "rate": str(rate.value),
    }


def shortfall_to_json(missing: MoneyAmount) -> Dict[str, Any]:
    return {
        "message": f"Insufficient funds to buy given money amount. Missing {format_money(missing)}.",
        "missing": money_to_json(missing),
    }
