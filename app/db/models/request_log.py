from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text
from sqlalchemy.sql import expression

from app.db.base_class import Base
from app.db.functions import utcnow
from app.db.indexing import prefix_index_options


URL_MAX_LENGTH = 1000
METHOD_MAX_LENGTH = 20
ERROR_MESSAGE_MAX_LENGTH = 1000


class RequestLog(Base):
	"""One append-only row per outbound HTTP call attempt."""

	__tablename__ = "http_request_logs"
	__table_args__ = (
		Index("ix_http_request_logs_url", "url", **prefix_index_options("url")),
	)

	id = Column(Integer, primary_key=True, autoincrement=True)
	url = Column(String(URL_MAX_LENGTH), nullable=False)
	method = Column(String(METHOD_MAX_LENGTH), nullable=False, index=True)
	duration_ms = Column(Integer, nullable=False)
	status_code = Column(Integer, nullable=True, index=True)
	request_body = Column(Text, nullable=True)
	response_body = Column(Text, nullable=True)
	request_headers = Column(Text, nullable=True)
	response_headers = Column(Text, nullable=True)
	error_message = Column(String(ERROR_MESSAGE_MAX_LENGTH), nullable=True)
	success = Column(Boolean, nullable=False, default=False, server_default=expression.false(), index=True)
	created_at = Column(DateTime(timezone=True), server_default=utcnow(), nullable=False, index=True)
