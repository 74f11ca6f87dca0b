"""Unified error handling — outcomes, ServiceError and RequestValidationError → JSON."""

from __future__ import annotations

from typing import TypeVar

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tutorialsapi.services import ServiceError
from tutorialsapi.services.outcome import STATUS_CODES, Outcome, kind_for_error

T = TypeVar("T")


def unwrap(outcome: Outcome[T]) -> T:
    """Return the success value or raise the matching ``HTTPException``."""
    if not outcome.ok:
        raise HTTPException(status_code=outcome.status_code, detail=outcome.message)
    return outcome.value  # type: ignore[return-value]


async def _service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
    status = STATUS_CODES[kind_for_error(exc)]
    return JSONResponse(status_code=status, content={"detail": str(exc)})


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for err in exc.errors():
        loc = " → ".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}")
    return JSONResponse(
        status_code=400,
        content={"detail": "; ".join(messages)},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the app."""
    app.add_exception_handler(ServiceError, _service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
