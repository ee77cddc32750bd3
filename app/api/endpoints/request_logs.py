from datetime import datetime
from typing import Optional

from fastapi import Depends, Query

from app.api.router import create_router
from app.api.dependencies.services import get_request_log_service
from app.core.config import settings
from app.schemas.request_log import RequestLogPage
from app.services.request_log_services import RequestLogService


router = create_router(name="request_logs")


@router.get("", response_model=RequestLogPage)
def get_request_logs(
	start_date: Optional[datetime] = Query(default=None, description="Inclusive lower bound on created_at"),
	end_date: Optional[datetime] = Query(default=None, description="Inclusive upper bound on created_at"),
	page: int = Query(default=1, ge=1),
	page_size: int = Query(default=settings.REQUEST_LOG_DEFAULT_PAGE_SIZE, ge=1, le=settings.REQUEST_LOG_MAX_PAGE_SIZE),
	request_log_service: RequestLogService = Depends(get_request_log_service),
):
	return request_log_service.query(start_date=start_date, end_date=end_date, page=page, page_size=page_size)
