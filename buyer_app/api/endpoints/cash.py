# buyer_app/api/endpoints/cash.py
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, Response

from buyer_app.api.deps import get_fx_service
from buyer_app.api.responses import JSONResponse
from buyer_app.core.errors import InvalidArgumentError
from buyer_app.core.rate_limit import api_rate_limit, limiter
from buyer_app.domain.codec import message, money_to_json
from buyer_app.domain.services.fx_service import FXService
from buyer_app.schemas.fx_schemas import CashIssuanceRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cash"])


@router.get("/cash")
@limiter.limit(api_rate_limit)
def read_cash_balance(request: Request, service: FXService = Depends(get_fx_service)):
    logger.info("Received read cash balance request.")
    try:
        balance = service.balance()
        return JSONResponse(status_code=200, content=money_to_json(balance))
    except Exception:
        logger.exception("Error while trying to read balance.")
        return JSONResponse(status_code=500, content=message("Unknown error."))


@router.post("/cash", status_code=201)
@limiter.limit(api_rate_limit)
def self_issue_cash(
    request: Request,
    body: Optional[CashIssuanceRequest] = Body(None),
    service: FXService = Depends(get_fx_service),
):
    if body is None:
        return JSONResponse(status_code=400, content=message("Missing mandatory request body."))
    logger.info(f"Received cash issuance request with payload: {body.model_dump(mode='json')}")
    try:
        service.self_issue_cash(body.amount.to_domain())
        return Response(status_code=201)
    except InvalidArgumentError as e:
        return JSONResponse(status_code=400, content=message(str(e)))
    except Exception:
        logger.exception("Error while trying to self issue cash.")
        return JSONResponse(status_code=500, content=message("Unknown error."))
