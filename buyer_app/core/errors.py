# buyer_app/core/errors.py


class InvalidArgumentError(ValueError):
    """Entrada del cliente inválida (código de moneda, monto, payload)."""


class FXServiceError(RuntimeError):
    """Fallo al comunicarse con el nodo FX."""
