from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Awaitable, Callable, Optional

from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.schemas.request_log import RecordLogResult, RequestLogCreate


logger = logging.getLogger(__name__)


def generate_correlation_id(existing: Optional[str]) -> str:
	if existing and existing.strip():
		return existing.strip()
	return str(uuid.uuid4())


def get_default_request_log_service():
	from app.db.session import SessionLocal
	from app.services.request_log_services import RequestLogService

	return RequestLogService(session_factory=SessionLocal)


def build_log_entry(
	method: str,
	url: str,
	duration_ms: int,
	response: Any = None,
	error: Optional[BaseException] = None,
	request_body: Any = None,
	request_headers: Any = None,
) -> RequestLogCreate:
	"""Describe one finished outbound call.

	``response`` is duck-typed on ``status_code``, ``headers`` and ``text``
	(httpx and requests responses both qualify). When the call raised, the
	response is taken from ``error.response`` if the client attached one.
	"""
	if response is None and error is not None:
		response = getattr(error, "response", None)

	status_code = getattr(response, "status_code", None) if response is not None else None
	response_headers = getattr(response, "headers", None) if response is not None else None
	response_body = _response_text(response) if response is not None else None

	success = error is None and status_code is not None and status_code < 400
	error_message: Optional[str] = None
	if error is not None:
		error_message = f"{type(error).__name__}: {error}"
	elif not success:
		error_message = f"HTTP {status_code}" if status_code is not None else "No response received"

	return RequestLogCreate(
		url=url,
		method=method,
		duration_ms=duration_ms,
		status_code=status_code,
		request_body=request_body,
		response_body=response_body,
		request_headers=request_headers,
		response_headers=response_headers,
		error_message=error_message,
		success=success,
	)


def _response_text(response: Any) -> Optional[str]:
	try:
		text = getattr(response, "text", None)
	except Exception:
		# Streaming responses raise until read; the body is not logged then
		return None
	return text if isinstance(text, str) else None


def log_outbound_call(
	method: str,
	url: str,
	call: Callable[[], Any],
	request_body: Any = None,
	request_headers: Any = None,
	service=None,
) -> Any:
	"""Execute an outbound HTTP call and record its outcome.

	Args:
		method: HTTP verb
		url: Full URL including the query string
		call: Callable that performs the request and returns the response
		request_body: Payload sent, recorded as text
		request_headers: Headers sent, recorded as JSON
		service: RequestLogService to record with (defaults to one on SessionLocal)

	Returns:
		Result of `call()`; exceptions from `call()` are re-raised unchanged
	"""
	if not settings.ENABLE_OUTBOUND_LOGGING:
		return call()

	start_ns = time.monotonic_ns()
	response: Any = None
	error: Optional[BaseException] = None
	try:
		response = call()
		return response
	except Exception as e:
		error = e
		raise
	finally:
		duration_ms = int((time.monotonic_ns() - start_ns) / 1_000_000)
		_record(service, method, url, duration_ms, response, error, request_body, request_headers)


async def log_outbound_call_async(
	method: str,
	url: str,
	call: Callable[[], Awaitable[Any]],
	request_body: Any = None,
	request_headers: Any = None,
	service=None,
) -> Any:
	"""Async variant of `log_outbound_call`; the write runs in a worker thread."""
	if not settings.ENABLE_OUTBOUND_LOGGING:
		return await call()

	start_ns = time.monotonic_ns()
	response: Any = None
	error: Optional[BaseException] = None
	try:
		response = await call()
		return response
	except Exception as e:
		error = e
		raise
	finally:
		duration_ms = int((time.monotonic_ns() - start_ns) / 1_000_000)
		await run_in_threadpool(
			_record, service, method, url, duration_ms, response, error, request_body, request_headers
		)


def _record(
	service,
	method: str,
	url: str,
	duration_ms: int,
	response: Any,
	error: Optional[BaseException],
	request_body: Any,
	request_headers: Any,
) -> Optional[RecordLogResult]:
	# Building the entry happens outside the service, so it is guarded here too
	try:
		entry = build_log_entry(method, url, duration_ms, response, error, request_body, request_headers)
		service = service or get_default_request_log_service()
	except Exception:
		logger.exception("Could not build request log entry for %s %s", method, url)
		return None
	return service.record(entry)
