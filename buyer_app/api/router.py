# buyer_app/api/router.py
from fastapi import APIRouter

from buyer_app.api.endpoints.cash import router as cash_router
from buyer_app.api.endpoints.exchange import router as exchange_router
from buyer_app.api.endpoints.purchases import router as purchases_router


api_router = APIRouter(prefix="/api")

api_router.include_router(exchange_router)
api_router.include_router(cash_router)
api_router.include_router(purchases_router)
