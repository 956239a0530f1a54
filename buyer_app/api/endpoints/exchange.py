# buyer_app/api/endpoints/exchange.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from buyer_app.api.deps import get_fx_service
from buyer_app.api.responses import JSONResponse
from buyer_app.core.errors import InvalidArgumentError
from buyer_app.core.rate_limit import api_rate_limit, limiter
from buyer_app.domain.codec import message, rate_to_json
from buyer_app.domain.currencies import parse_currency_code
from buyer_app.domain.services.fx_service import FXService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["exchange"])


@router.get("/exchangeRate")
@limiter.limit(api_rate_limit)
def read_exchange_rate(
    request: Request,
    from_param: Optional[str] = Query(None, alias="from"),
    to_param: Optional[str] = Query(None, alias="to"),
    service: FXService = Depends(get_fx_service),
):
    logger.info("Received read exchange rate request.")
    try:
        from_currency = parse_currency_code(from_param) if from_param is not None else None
        to_currency = parse_currency_code(to_param) if to_param is not None else None
        if from_currency is None or to_currency is None:
            return JSONResponse(
                status_code=400,
                content=message("Unspecified 'from' and 'to' currency codes query parameters."),
            )

        rate = service.query_rate(from_currency, to_currency)
        if rate is None:
            return JSONResponse(status_code=404, content=message("No exchange rate found."))
        return JSONResponse(status_code=200, content=rate_to_json(rate))
    except InvalidArgumentError as e:
        return JSONResponse(status_code=400, content=message(str(e)))
    except Exception:
        logger.exception("Error while trying to retrieve exchange rate.")
        return JSONResponse(status_code=500, content=message("Unknown error."))
