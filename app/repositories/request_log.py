"""Request log repository for outbound call records."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Query, Session

from app.db.models.request_log import RequestLog
from app.repositories.base import BaseRepository
from app.schemas.request_log import RequestLogCreate


class RequestLogRepository(BaseRepository[RequestLog]):
	"""Append-only repository for RequestLog rows."""

	def __init__(self, db: Session, correlation_id: Optional[str] = None):
		super().__init__(db, RequestLog, correlation_id)

	def insert(self, entry: RequestLogCreate) -> RequestLog:
		"""Insert one row; id and created_at are assigned by storage."""
		return self.create(entry.model_dump())

	def count_in_range(self, start_date: Optional[datetime] = None, end_date: Optional[datetime] = None) -> int:
		result = self._in_range(self.db.query(self.model.id), start_date, end_date).count()
		self._log_operation("count_in_range", start_date=start_date, end_date=end_date, count=result)
		return result

	def list_in_range(
		self,
		start_date: Optional[datetime] = None,
		end_date: Optional[datetime] = None,
		offset: int = 0,
		limit: int = 50,
	) -> List[RequestLog]:
		"""Newest first; id breaks ties between equal timestamps."""
		query = self._in_range(self.db.query(self.model), start_date, end_date)
		results = (
			query.order_by(self.model.created_at.desc(), self.model.id.desc())
			.offset(offset)
			.limit(limit)
			.all()
		)
		self._log_operation("list_in_range", offset=offset, limit=limit, count=len(results))
		return results

	def _in_range(self, query: Query, start_date: Optional[datetime], end_date: Optional[datetime]) -> Query:
		# Shared by the count and the page fetch so both see the same rows
		if start_date is not None:
			query = query.filter(self.model.created_at >= start_date)
		if end_date is not None:
			query = query.filter(self.model.created_at <= end_date)
		return query
