import os
import re

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.schema import CreateIndex

from app.db import indexing
from app.db.indexing import (
    has_bounded_index_keys,
    prefix_index_options,
    register_index_key_capability,
    url_index_options,
)
from app.db.models.request_log import RequestLog


PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

EXPECTED_INDEXES = {
    "ix_http_request_logs_created_at",
    "ix_http_request_logs_method",
    "ix_http_request_logs_status_code",
    "ix_http_request_logs_success",
    "ix_http_request_logs_url",
}


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'migrations.db'}"


@pytest.fixture
def alembic_config(database_url):
    config = Config(os.path.join(PROJECT_ROOT, "alembic.ini"))
    config.set_main_option("script_location", os.path.join(PROJECT_ROOT, "alembic"))
    config.set_main_option("sqlalchemy.url", database_url)
    config.attributes["configure_logger"] = False
    return config


def _inspect(database_url):
    engine = create_engine(database_url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        if "http_request_logs" not in tables:
            return tables, {}, []
        columns = {c["name"]: c for c in inspector.get_columns("http_request_logs")}
        indexes = inspector.get_indexes("http_request_logs")
        return tables, columns, indexes
    finally:
        engine.dispose()


def test_upgrade_creates_table_columns_and_indexes(alembic_config, database_url):
    command.upgrade(alembic_config, "head")

    tables, columns, indexes = _inspect(database_url)
    assert "http_request_logs" in tables
    assert set(columns) == {
        "id", "url", "method", "duration_ms", "status_code", "request_body", "response_body",
        "request_headers", "response_headers", "error_message", "success", "created_at",
    }
    for required in ("url", "method", "duration_ms", "success", "created_at"):
        assert columns[required]["nullable"] is False
    for optional in ("status_code", "request_body", "response_body", "request_headers", "response_headers", "error_message"):
        assert columns[optional]["nullable"] is True
    assert {index["name"] for index in indexes} == EXPECTED_INDEXES


def test_upgrade_twice_does_not_duplicate_indexes(alembic_config, database_url):
    command.upgrade(alembic_config, "head")
    command.upgrade(alembic_config, "head")

    _, _, indexes = _inspect(database_url)
    names = [index["name"] for index in indexes]
    assert sorted(names) == sorted(EXPECTED_INDEXES)


def test_downgrade_removes_table(alembic_config, database_url):
    command.upgrade(alembic_config, "head")
    command.downgrade(alembic_config, "base")

    tables, _, _ = _inspect(database_url)
    assert "http_request_logs" not in tables


def test_migrated_table_defaults(alembic_config, database_url):
    command.upgrade(alembic_config, "head")

    engine = create_engine(database_url)
    try:
        with engine.begin() as conn:
            conn.exec_driver_sql(
                "INSERT INTO http_request_logs (url, method, duration_ms) VALUES ('https://a.example', 'GET', 5)"
            )
            row = conn.exec_driver_sql("SELECT id, success, created_at FROM http_request_logs").one()
    finally:
        engine.dispose()

    assert row[0] == 1
    assert row[1] in (0, False)
    assert row[2] is not None
    # Server default matches the bound parameter text format
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{6}", row[2])


def test_url_index_is_bounded_prefix_on_mysql():
    assert url_index_options(mysql.dialect()) == {"mysql_length": {"url": 255}}

    index = next(i for i in RequestLog.__table__.indexes if i.name == "ix_http_request_logs_url")
    ddl = str(CreateIndex(index).compile(dialect=mysql.dialect()))

    assert "url(255)" in ddl


def test_url_index_is_full_value_on_unbounded_engines():
    assert url_index_options(sqlite.dialect()) == {}
    assert url_index_options(postgresql.dialect()) == {}

    index = next(i for i in RequestLog.__table__.indexes if i.name == "ix_http_request_logs_url")
    ddl = str(CreateIndex(index).compile(dialect=postgresql.dialect()))

    assert "(url)" in ddl


def test_prefix_length_override():
    assert url_index_options(mysql.dialect(), prefix_length=191) == {"mysql_length": {"url": 191}}
    assert prefix_index_options("url", 100)["mysql_length"] == {"url": 100}


def test_engine_capability_registry(monkeypatch):
    monkeypatch.setattr(indexing, "BOUNDED_INDEX_KEY_ENGINES", dict(indexing.BOUNDED_INDEX_KEY_ENGINES))

    assert has_bounded_index_keys("mysql") is True
    assert has_bounded_index_keys("mariadb") is True
    assert has_bounded_index_keys("postgresql") is False

    register_index_key_capability("postgresql", True)

    assert has_bounded_index_keys("postgresql") is True
    assert url_index_options(postgresql.dialect()) == {"postgresql_length": {"url": 255}}
