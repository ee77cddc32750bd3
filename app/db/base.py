# Import every model so Base.metadata is complete for Alembic and create_all
from app.db.base_class import Base  # noqa: F401
from app.db.models.request_log import RequestLog  # noqa: F401
