"""Error envelope shared by every governance endpoint."""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body returned instead of a result when an evaluation cannot be answered."""

    error: bool = True
    code: str
    message: str
    module: str | None = None
    details: dict[str, Any] | None = None


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Unknown configuration preset"},
    422: {"model": ErrorResponse, "description": "Gate verdict is 'fail' (enforce mode)"},
    500: {"model": ErrorResponse, "description": "Reference fixture missing or malformed"},
    504: {"model": ErrorResponse, "description": "Evaluation exceeded the configured timeout"},
}


def error_response(
    status_code: int,
    code: str,
    message: str,
    module: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(code=code, message=message, module=module, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())
