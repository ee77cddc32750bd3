from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings


def build_engine(url: str, echo: bool = False) -> Engine:
	connect_args = {}
	if url.startswith("sqlite"):
		# Outbound calls are logged from worker threads as well as the request thread
		connect_args["check_same_thread"] = False
	return create_engine(url, echo=echo, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker:
	return sessionmaker(autocommit=False, autoflush=False, bind=engine)


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
SessionLocal = build_session_factory(engine)
