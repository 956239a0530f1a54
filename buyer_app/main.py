# buyer_app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from slowapi.middleware import SlowAPIMiddleware
from slowapi.errors import RateLimitExceeded

from buyer_app.api.responses import JSONResponse
from buyer_app.api.router import api_router
from buyer_app.core.config import Settings, settings as default_settings
from buyer_app.core.logging import setup_logging
from buyer_app.core.rate_limit import configure_rate_limit
from buyer_app.domain.codec import message
from buyer_app.domain.services.fx_service import FXService
from buyer_app.infra.clients.fx_node import HttpFXService

logger = logging.getLogger(__name__)


def create_app(
    fx_service: FXService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        default_response_class=JSONResponse,
    )

    # Servicio FX inyectado (por defecto, el nodo remoto)
    if fx_service is None:
        fx_service = HttpFXService(
            base_url=settings.FX_SERVICE_URL,
            timeout=settings.FX_SERVICE_TIMEOUT,
        )
    app.state.fx_service = fx_service

    # Rate limiting: límite por IP en cada endpoint de /api (decorador) y en "/" (middleware)
    app.state.limiter = configure_rate_limit(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    # Routers
    app.include_router(api_router)

    @app.on_event("startup")
    async def on_startup() -> None:
        logger.info(f"{settings.PROJECT_NAME} {settings.PROJECT_VERSION} iniciada")

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        close = getattr(app.state.fx_service, "close", None)
        if callable(close):
            close()

    @app.get("/")
    async def root():
        return {"service": settings.PROJECT_NAME, "status": "ok"}

    return app


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"message": "Rate limit exceeded", "error": str(exc)},
    )


def _validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content=message(describe_validation_errors(exc)))


def describe_validation_errors(exc: RequestValidationError) -> str:
    partes = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            return "Malformed JSON request body."
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query")]
        msg = str(err.get("msg", "invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        partes.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(partes) or "Invalid request."


app = create_app()
