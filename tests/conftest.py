import os
import sys
from datetime import datetime, timedelta

import pytest

# Ensure project root is on sys.path for 'app' imports
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Ensure app settings never point at a real database on import
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from app.db.base_class import Base
from app.db import base as models_import  # noqa: F401 - ensure models are imported
from app.db.models.request_log import RequestLog
from app.db.session import build_engine, build_session_factory
from app.services.request_log_services import RequestLogService


BASE_TIME = datetime(2025, 5, 16, 12, 0, 0)


class RecordingDiagnostics:
    """Diagnostic sink that keeps every emission for assertions."""

    def __init__(self):
        self.infos = []
        self.errors = []

    def info(self, message, **fields):
        self.infos.append((message, fields))

    def error(self, message, error=None, **fields):
        self.errors.append((message, error, fields))

    def operations(self):
        return [fields.get("operation") for _, fields in self.infos]


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'request_logs.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def broken_session_factory(tmp_path):
    # Database file without the request log table: every statement fails
    engine = build_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def diagnostics():
    return RecordingDiagnostics()


@pytest.fixture
def service(session_factory, diagnostics):
    return RequestLogService(session_factory=session_factory, diagnostics=diagnostics)


@pytest.fixture
def seed_logs(session_factory):
    """Insert rows with explicit, one minute apart created_at values."""

    def _seed(rows):
        ids = []
        with session_factory() as db:
            for offset, fields in enumerate(rows):
                values = {
                    "url": "https://api.example.com/v1/payments",
                    "method": "GET",
                    "duration_ms": 10,
                    "success": True,
                    "created_at": BASE_TIME + timedelta(minutes=offset),
                }
                values.update(fields)
                log = RequestLog(**values)
                db.add(log)
                db.flush()
                ids.append(log.id)
            db.commit()
        return ids

    return _seed
