from http import HTTPStatus

from app.repositories.request_log import RequestLogRepository
from app.services.exceptions import (
    RequestLogQueryError,
    ValidationError,
    get_http_status_for_error,
)


def test_get_by_id_returns_row_or_none(session_factory, seed_logs):
    ids = seed_logs([{"method": "DELETE"}])

    with session_factory() as db:
        repo = RequestLogRepository(db)
        assert repo.get_by_id(ids[0]).method == "DELETE"
        assert repo.get_by_id(ids[0] + 100) is None


def test_count_applies_equality_filters(session_factory, seed_logs):
    seed_logs([{"success": True}, {"success": False, "status_code": 502}, {"success": True}])

    with session_factory() as db:
        repo = RequestLogRepository(db)
        assert repo.count() == 3
        assert repo.count(filters={"success": True}) == 2
        assert repo.count(filters={"status_code": 502}) == 1
        assert repo.count(filters={"not_a_column": "x"}) == 3


def test_http_status_for_service_errors():
    assert get_http_status_for_error(ValidationError("page", "must be at least 1")) == HTTPStatus.BAD_REQUEST
    assert get_http_status_for_error(RequestLogQueryError("down")) == HTTPStatus.INTERNAL_SERVER_ERROR


def test_http_status_for_plain_exceptions():
    assert get_http_status_for_error(ValueError("bad")) == HTTPStatus.BAD_REQUEST
    assert get_http_status_for_error(NotImplementedError()) == HTTPStatus.NOT_IMPLEMENTED
    assert get_http_status_for_error(RuntimeError("boom")) == HTTPStatus.INTERNAL_SERVER_ERROR
