from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from zen_service.api.models import ErrorMessage
from zen_service.core.errors import ExecutionError


async def execution_exception_handler(
    request: Request, exc: ExecutionError
) -> JSONResponse:
    body = ErrorMessage(message=exc.message, kind=exc.kind, detail=exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    detail_parts = []
    for err in exc.errors():
        loc = " -> ".join(str(l) for l in err["loc"])
        detail_parts.append(f"{loc}: {err['msg']}")

    detail = "; ".join(detail_parts)
    body = ErrorMessage(
        message=f"validation_error: {detail}",
        kind="validation_error",
        detail=detail,
    )
    return JSONResponse(status_code=422, content=body.model_dump())
