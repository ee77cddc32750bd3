"""Request log service: durable records of outbound HTTP calls.

Two paths with opposite failure policies:

- ``record`` writes one row and never raises. Whatever goes wrong with the
  write is reported on the diagnostic channel and turned into a
  ``RecordLogResult`` carrying ``NOT_RECORDED``, so logging can never fail
  the transaction whose call is being logged.
- ``query`` reads a filtered, paginated slice and propagates failures as
  ``ValidationError`` or ``RequestLogQueryError``.

Every call opens its own session from the injected factory and closes it
before returning. The service keeps no per-call state, so one instance can
be shared by any number of concurrent callers.
"""

import math
from datetime import datetime
from typing import Callable, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.diagnostics import DiagnosticSink
from app.repositories.request_log import RequestLogRepository
from app.schemas.request_log import (
	NOT_RECORDED,
	GetRequestLogsInput,
	PaginationMeta,
	RecordLogResult,
	RequestLogCreate,
	RequestLogPage,
	RequestLogRead,
)
from app.services.base import BaseService
from app.services.exceptions import RequestLogQueryError, RequestLogWriteError, ValidationError


class RequestLogService(BaseService):
	"""Writes and reads RequestLog rows."""

	def __init__(
		self,
		session_factory: Callable[[], Session],
		diagnostics: Optional[DiagnosticSink] = None,
		correlation_id: Optional[str] = None,
	):
		super().__init__(correlation_id, diagnostics)
		self.session_factory = session_factory

	def record(self, entry: RequestLogCreate) -> RecordLogResult:
		"""Store one outbound call record, at most one attempt.

		Args:
			entry: Call outcome to store

		Returns:
			RecordLogResult with the assigned id, or with NOT_RECORDED and the
			error code when the write failed
		"""
		self._emit(
			self.log_operation,
			"record_attempt",
			method=entry.method,
			url=entry.url,
			duration_ms=entry.duration_ms,
			status_code=entry.status_code,
		)

		try:
			log_id = self._insert(entry)
		except Exception as e:
			write_error = e if isinstance(e, RequestLogWriteError) else RequestLogWriteError(
				reason=str(e),
				correlation_id=self.correlation_id,
			)
			self._emit(
				self.diagnostics.error,
				"Failed to record request log",
				e,
				correlation_id=self.correlation_id,
				service=self.__class__.__name__,
				operation="record_failed",
				method=entry.method,
				url=entry.url,
				error_code=write_error.error_code,
			)
			return RecordLogResult(
				success=False,
				log_id=NOT_RECORDED,
				error_code=write_error.error_code,
				message=write_error.message,
			)

		self._emit(self.log_operation, "record_success", log_id=log_id)
		return RecordLogResult(success=True, log_id=log_id, message="Request log recorded")

	def _emit(self, emit, *args, **fields) -> None:
		# Diagnostics on the write path are fire-and-forget: a failing sink
		# must not turn into a failure of the logged call
		try:
			emit(*args, **fields)
		except Exception:
			pass

	def _insert(self, entry: RequestLogCreate) -> int:
		db = self.session_factory()
		try:
			repo = RequestLogRepository(db, correlation_id=self.correlation_id)

			def _insert_log() -> int:
				log = repo.insert(entry)
				# NOT_RECORDED must stay distinguishable from every real id
				if not isinstance(log.id, int) or log.id <= NOT_RECORDED:
					raise RequestLogWriteError(
						reason=f"storage assigned invalid id {log.id!r}",
						correlation_id=self.correlation_id,
					)
				return log.id

			return self.run_in_transaction(db, _insert_log)
		finally:
			db.close()

	def query(
		self,
		start_date: Optional[datetime] = None,
		end_date: Optional[datetime] = None,
		page: int = 1,
		page_size: int = 50,
	) -> RequestLogPage:
		"""Get one page of request logs, newest first.

		Args:
			start_date: Inclusive lower bound on created_at
			end_date: Inclusive upper bound on created_at
			page: 1-based page number
			page_size: Rows per page

		Returns:
			RequestLogPage with the rows and pagination metadata

		Raises:
			ValidationError: If page or page_size is out of range
			RequestLogQueryError: If storage cannot be read
		"""
		try:
			params = GetRequestLogsInput(
				start_date=start_date,
				end_date=end_date,
				page=page,
				page_size=page_size,
			)
		except PydanticValidationError as e:
			errors = e.errors()
			field = str(errors[0]["loc"][0]) if errors and errors[0].get("loc") else "query"
			raise ValidationError(
				field=field,
				message=errors[0]["msg"] if errors else str(e),
				correlation_id=self.correlation_id,
				validation_errors=[{"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]} for err in errors],
			)

		self.log_operation(
			"query_attempt",
			start_date=params.start_date,
			end_date=params.end_date,
			page=params.page,
			page_size=params.page_size,
		)

		db = self.session_factory()
		try:
			repo = RequestLogRepository(db, correlation_id=self.correlation_id)
			total = repo.count_in_range(params.start_date, params.end_date)
			rows = repo.list_in_range(
				params.start_date,
				params.end_date,
				offset=(params.page - 1) * params.page_size,
				limit=params.page_size,
			)
			logs = [RequestLogRead.from_orm(row) for row in rows]
		except SQLAlchemyError as e:
			self.diagnostics.error(
				"Failed to query request logs",
				e,
				correlation_id=self.correlation_id,
				service=self.__class__.__name__,
				operation="query_failed",
			)
			raise RequestLogQueryError(reason=str(e), correlation_id=self.correlation_id) from e
		finally:
			db.close()

		pagination = PaginationMeta(
			total=total,
			page=params.page,
			page_size=params.page_size,
			total_pages=math.ceil(total / params.page_size),
		)
		self.log_operation("query_success", total=total, returned=len(logs), page=params.page)
		return RequestLogPage(logs=logs, pagination=pagination)
