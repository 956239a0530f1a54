# buyer_app/api/responses.py
from fastapi.responses import JSONResponse as _JSONResponse


class JSONResponse(_JSONResponse):
    media_type = "application/json; charset=utf-8"
