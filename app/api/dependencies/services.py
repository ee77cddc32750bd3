"""Service dependency providers for FastAPI dependency injection."""

from typing import Callable, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.api.dependencies.database import get_session_factory
from app.services.request_log_services import RequestLogService


def get_correlation_id(request: Request) -> Optional[str]:
	"""Extract or generate correlation ID for logging and tracing."""
	from app.core.observability import generate_correlation_id
	cid = getattr(request.state, "correlation_id", None)
	if not cid:
		cid = generate_correlation_id(request.headers.get("X-Correlation-ID"))
		setattr(request.state, "correlation_id", cid)
	return cid


def get_request_log_service(
	session_factory: Callable[[], Session] = Depends(get_session_factory),
	correlation_id: Optional[str] = Depends(get_correlation_id)
) -> RequestLogService:
	"""Provide RequestLogService instance."""
	return RequestLogService(session_factory=session_factory, correlation_id=correlation_id)
