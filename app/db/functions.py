from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.expression import FunctionElement
from sqlalchemy.types import DateTime


class utcnow(FunctionElement):
	"""Current UTC timestamp, usable as a server default."""
	type = DateTime(timezone=True)
	inherit_cache = True


@compiles(utcnow)
def _utcnow_default(element, compiler, **kw):
	return "CURRENT_TIMESTAMP"


@compiles(utcnow, "sqlite")
def _utcnow_sqlite(element, compiler, **kw):
	# SQLite compares datetimes as text; stored defaults must match the bound
	# parameter format 'YYYY-MM-DD HH:MM:SS.ffffff'
	return "(strftime('%Y-%m-%d %H:%M:%f', 'now') || '000')"
