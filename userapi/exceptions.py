"""
userapi/exceptions.py

Domain errors and their translation to HTTP responses.

Services and the validation pipeline raise the exceptions defined here; they
never build responses themselves. register_exception_handlers() wires the
translation into a FastAPI app:

  RequestValidationFailed / RequestValidationError -> 400 'Validation error'
  ObjectNotFoundError                              -> 404 'Not Found'

Anything else falls through to FastAPI's default 500 handling.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from userapi.schemas.error import FieldError, StandardError

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "Validation error"
VALIDATION_MESSAGE = "Error on validation attributes"
NOT_FOUND_ERROR = "Not Found"


class ObjectNotFoundError(Exception):
    """
    Raised when no stored document matches the requested id.
    """

    def __init__(self, object_id: str, type_name: str):
        self.object_id = object_id
        self.type_name = type_name
        super().__init__(f"Object not found. Id: {object_id} Type: {type_name}")

    @property
    def message(self) -> str:
        return str(self)


class RequestValidationFailed(Exception):
    """
    Raised when a request violates one or more field constraints. Carries
    every violation, never just the first.
    """

    def __init__(self, errors: Sequence[FieldError]):
        self.errors: List[FieldError] = list(errors)
        super().__init__(VALIDATION_MESSAGE)


def build_error_body(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    errors: Optional[Sequence[FieldError]] = None,
) -> dict:
    """
    Assemble a StandardError body as a JSON-ready dict. The 'errors' key is
    omitted entirely when there is no field list.
    """
    body = StandardError(
        timestamp=datetime.now(timezone.utc),
        path=request.url.path,
        status=status_code,
        error=error,
        message=message,
        errors=list(errors) if errors is not None else None,
    )
    return body.model_dump(mode="json", by_alias=True, exclude_none=True)


def field_errors_from_pydantic(exc: RequestValidationError) -> List[FieldError]:
    """
    Convert FastAPI/pydantic decode errors (bad JSON, wrong types) into the
    same FieldError list the validation pipeline produces.
    """
    field_errors = []
    for err in exc.errors():
        # JSON decode errors locate a byte offset, not a field
        loc = [part for part in err.get("loc", ()) if isinstance(part, str) and part != "body"]
        field_name = loc[-1] if loc and err.get("type") != "json_invalid" else "body"
        field_errors.append(FieldError(field_name=field_name, message=err.get("msg", "invalid value")))
    return field_errors


async def validation_failed_handler(request: Request, exc: RequestValidationFailed) -> JSONResponse:
    logger.info(
        "Validation failed on %s: %s",
        request.url.path,
        ", ".join(f"{e.field_name}={e.message!r}" for e in exc.errors),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=build_error_body(
            request, status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR, VALIDATION_MESSAGE, exc.errors
        ),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed payloads are reported in the same shape as constraint failures
    return await validation_failed_handler(request, RequestValidationFailed(field_errors_from_pydantic(exc)))


async def object_not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=build_error_body(request, status.HTTP_404_NOT_FOUND, NOT_FOUND_ERROR, exc.message),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain error handlers to a FastAPI application."""
    app.add_exception_handler(RequestValidationFailed, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ObjectNotFoundError, object_not_found_handler)
