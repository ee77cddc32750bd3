from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field, validator

from app.db.models.request_log import ERROR_MESSAGE_MAX_LENGTH, METHOD_MAX_LENGTH, URL_MAX_LENGTH


# Returned by RequestLogService.record when the write did not reach storage.
# Storage ids start at 1, so 0 never collides with a real id.
NOT_RECORDED = 0


def _serialize_payload(value: Any) -> Optional[str]:
	"""Render bodies and header maps as text columns."""
	if value is None or isinstance(value, str):
		return value
	if isinstance(value, (bytes, bytearray)):
		return bytes(value).decode("utf-8", errors="replace")
	if isinstance(value, Mapping):
		value = dict(value)
	return json.dumps(value, ensure_ascii=False, default=str)


class RequestLogCreate(BaseModel):
	"""Input for recording one outbound call.

	Values are normalized rather than rejected: building this model must not
	be able to fail the business operation that is being logged.
	"""
	url: str = Field(..., description="Full URL including the query string")
	method: str = Field(..., description="HTTP verb")
	duration_ms: int = Field(..., description="Elapsed wall time of the call")
	success: bool = Field(..., description="Whether the call succeeded")
	status_code: Optional[int] = Field(default=None, description="Present only if a response was received")
	request_body: Optional[str] = None
	response_body: Optional[str] = None
	request_headers: Optional[str] = None
	response_headers: Optional[str] = None
	error_message: Optional[str] = Field(default=None, description="Present only on failure")

	@validator('url', pre=True)
	def truncate_url(cls, v):
		return str(v)[:URL_MAX_LENGTH]

	@validator('method', pre=True)
	def normalize_method(cls, v):
		return str(v).strip().upper()[:METHOD_MAX_LENGTH]

	@validator('duration_ms', pre=True)
	def clamp_duration(cls, v):
		return max(0, int(v))

	@validator('request_body', 'response_body', 'request_headers', 'response_headers', pre=True)
	def serialize_payload(cls, v):
		return _serialize_payload(v)

	@validator('error_message', pre=True)
	def truncate_error_message(cls, v):
		if v is None:
			return None
		return str(v)[:ERROR_MESSAGE_MAX_LENGTH]


class RequestLogRead(BaseModel):
	id: int
	url: str
	method: str
	duration_ms: int
	status_code: Optional[int] = None
	request_body: Optional[str] = None
	response_body: Optional[str] = None
	request_headers: Optional[str] = None
	response_headers: Optional[str] = None
	error_message: Optional[str] = None
	success: bool
	created_at: datetime

	class Config:
		from_attributes = True


class GetRequestLogsInput(BaseModel):
	"""Input for the paginated request log query."""
	start_date: Optional[datetime] = Field(default=None, description="Inclusive lower bound on created_at")
	end_date: Optional[datetime] = Field(default=None, description="Inclusive upper bound on created_at")
	page: int = Field(default=1, ge=1, description="1-based page number")
	page_size: int = Field(default=50, ge=1, description="Rows per page")

	@validator('start_date', 'end_date')
	def normalize_to_utc(cls, v):
		"""Stored created_at values are UTC; compare offset-aware bounds in UTC too."""
		if v is None or v.tzinfo is None:
			return v
		return v.astimezone(timezone.utc).replace(tzinfo=None)


class PaginationMeta(BaseModel):
	total: int
	page: int
	page_size: int = Field(..., alias="pageSize")
	total_pages: int = Field(..., alias="totalPages")

	class Config:
		populate_by_name = True


class RequestLogPage(BaseModel):
	logs: List[RequestLogRead]
	pagination: PaginationMeta


class RecordLogResult(BaseModel):
	"""Result object for a log write: either an assigned id or NOT_RECORDED."""
	success: bool
	log_id: int = NOT_RECORDED
	error_code: Optional[str] = None
	message: Optional[str] = None

	@property
	def recorded(self) -> bool:
		return self.success and self.log_id > NOT_RECORDED
