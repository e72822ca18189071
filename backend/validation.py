"""
validation.py — Field rules and error rendering
Reusable checks for pydantic validators (each raises a PydanticCustomError so
the message reaches the client verbatim) and the exception handlers that turn
failures into {"error": ...} / {"errors": [...]} payloads.
"""

import json
import logging
import math
from typing import List, NoReturn, Optional

from email_validator import validate_email, EmailNotValidError
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pydantic_core import PydanticCustomError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

SERVER_ERROR = "Hubo un error"


def _fail(message: str) -> NoReturn:
    raise PydanticCustomError("invalid_field", message)


def require_not_empty(value, message: str) -> str:
    if value is None:
        _fail(message)
    text = str(value)
    if not text.strip():
        _fail(message)
    return text


def require_min_length(value, length: int, message: str) -> str:
    if not isinstance(value, str) or len(value) < length:
        _fail(message)
    return value


def require_exact_length(value, length: int, message: str) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str) or len(value) != length:
        _fail(message)
    return value


def require_email(value, message: str = "Correo no válido") -> str:
    if not isinstance(value, str):
        _fail(message)
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        _fail(message)
    return value


def _number(value) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def amount_errors(value, empty_message: str, positive_message: str) -> List[str]:
    """Every amount rule the value breaks, in check order: present, numeric, positive."""
    messages = []
    if value is None or (isinstance(value, str) and not value.strip()):
        messages.append(empty_message)
    if isinstance(value, bool) or _number(value) is None:
        messages.append("Cantidad no válida")
    number = _number(value)
    if number is None or number <= 0:
        messages.append(positive_message)
    return messages


def check_amount_rules(model_cls, data, handler, empty_message: str, positive_message: str):
    """
    Wrap-validator body for models with an `amount` field: field validators
    run as usual, then each failing amount rule is added as its own error.
    """
    line_errors = []
    model = None
    try:
        model = handler(data)
    except ValidationError as e:
        line_errors = [
            {"type": PydanticCustomError(err["type"], err["msg"]), "loc": err["loc"], "input": err["input"]}
            for err in e.errors()
        ]

    raw = data.get("amount") if isinstance(data, dict) else None
    for message in amount_errors(raw, empty_message, positive_message):
        line_errors.append({"type": PydanticCustomError("invalid_field", message), "loc": ("amount",), "input": raw})

    if line_errors:
        raise ValidationError.from_exception_data(model_cls.__name__, line_errors)
    model.amount = float(raw)
    return model


def parse_body(model_cls):
    """
    Dependency that validates the JSON body against `model_cls`. A request
    without a body is validated as {} so every field reports its own message.
    """
    async def dependency(request: Request):
        raw = await request.body()
        try:
            data = json.loads(raw) if raw.strip() else {}
        except ValueError as e:
            raise RequestValidationError([{
                "type": "json_invalid",
                "loc": ("body",),
                "msg": "JSON decode error",
                "input": {},
                "ctx": {"error": str(e)},
            }])
        try:
            return model_cls.model_validate(data)
        except ValidationError as e:
            raise RequestValidationError([
                {**err, "loc": ("body", *err["loc"])} for err in e.errors(include_url=False)
            ])

    return dependency


def invalid_param(name: str, value, message: str) -> RequestValidationError:
    """Build the same 400 payload body validation produces, for a path parameter."""
    return RequestValidationError([{
        "type": "invalid_field",
        "loc": ("path", name),
        "msg": message,
        "input": value,
    }])


def _format_error(error: dict) -> dict:
    loc = error.get("loc", ())
    location = loc[0] if loc else ""
    path = ".".join(str(part) for part in loc[1:])
    return {
        "type": "field",
        "value": error.get("input"),
        "msg": error.get("msg"),
        "path": path,
        "location": location,
    }


# ── Exception handlers ────────────────────────────────────────────
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [_format_error(e) for e in exc.errors()]
    return JSONResponse(status_code=400, content=jsonable_encoder({"errors": errors}))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": SERVER_ERROR})
