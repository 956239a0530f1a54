# buyer_app/api/deps.py
from fastapi import Request

from buyer_app.domain.services.fx_service import FXService


def get_fx_service(request: Request) -> FXService:
    """Dependencia FastAPI: el servicio FX inyectado en create_app()."""
    return request.app.state.fx_service
