# buyer_app/core/rate_limit.py
from typing import Any, Dict

from slowapi import Limiter
from slowapi.util import get_remote_address

from buyer_app.core.config import Settings, settings

# Límite vigente; create_app() lo ajusta según sus Settings
_RATE_LIMIT: Dict[str, Any] = {
    "value": settings.RATE_LIMIT,
}


def api_rate_limit() -> str:
    return _RATE_LIMIT["value"]


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[api_rate_limit],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    enabled=settings.RATE_LIMIT_ENABLED,
)


def configure_rate_limit(cfg: Settings) -> Limiter:
    """Aplica la configuración de la app al limiter y limpia los contadores."""
    _RATE_LIMIT["value"] = cfg.RATE_LIMIT
    limiter.enabled = cfg.RATE_LIMIT_ENABLED
    limiter.reset()
    return limiter
