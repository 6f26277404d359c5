"""Structured JSON error bodies shared by the routers."""

from typing import Optional

from fastapi.responses import JSONResponse

from api.schemas.job import ErrorResponse


def error_response(status_code: int, error: str, exc: Exception, job_id: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=str(exc), job_id=job_id)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))
