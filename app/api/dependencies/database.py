from typing import Callable

from sqlalchemy.orm import Session

from app.db.session import SessionLocal


def get_session_factory() -> Callable[[], Session]:
	"""Provide the factory services open their own sessions from."""
	return SessionLocal
