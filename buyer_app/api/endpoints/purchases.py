# buyer_app/api/endpoints/purchases.py
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, Response

from buyer_app.api.deps import get_fx_service
from buyer_app.api.responses import JSONResponse
from buyer_app.core.errors import InvalidArgumentError
from buyer_app.core.rate_limit import api_rate_limit, limiter
from buyer_app.domain.codec import message, shortfall_to_json
from buyer_app.domain.services.fx_service import FXService
from buyer_app.schemas.fx_schemas import PurchaseRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["purchases"])


@router.post("/purchases", status_code=201)
@limiter.limit(api_rate_limit)
def attempt_to_buy_cash(
    request: Request,
    body: Optional[PurchaseRequest] = Body(None),
    service: FXService = Depends(get_fx_service),
):
    if body is None:
        return JSONResponse(status_code=400, content=message("Missing mandatory request body."))
    logger.info(f"Received cash acquisition request with payload: {body.model_dump(mode='json')}")
    try:
        result = service.buy_money_amount(body.amount.to_domain(), body.currency)
        if result.fully_funded:
            return Response(status_code=201)
        # Fondos insuficientes: resultado normal, no excepción
        return JSONResponse(status_code=422, content=shortfall_to_json(result.missing_amount))
    except InvalidArgumentError as e:
        return JSONResponse(status_code=400, content=message(str(e)))
    except Exception:
        logger.exception("Error while trying to buy money.")
        return JSONResponse(status_code=500, content=message("Unknown error."))
