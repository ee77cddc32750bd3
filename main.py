from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.endpoints import request_logs
from app.core.config import settings
from app.core.diagnostics import configure_logging
# Import all models so metadata is complete
from app.db import base  # noqa: F401
from app.services.exceptions import ServiceError, create_error_response, get_http_status_for_error

configure_logging(settings.LOG_LEVEL)

app = FastAPI()

app.include_router(request_logs.router, prefix="/request-logs", tags=["request-logs"])


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
	return JSONResponse(status_code=get_http_status_for_error(exc).value, content=create_error_response(exc))
