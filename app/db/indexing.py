"""Index-key capabilities of the storage engines we run against.

Some engines cap the byte width of an index key (MySQL/MariaDB InnoDB cannot
index a VARCHAR(1000) in utf8mb4), so long string columns must be indexed
over a bounded prefix there. Every other engine gets a full-value index.
Supporting a new engine means registering its capability here.
"""

from typing import Any, Dict, Optional

from sqlalchemy.engine import Dialect

from app.core.config import settings


# dialect name -> True when the engine enforces a maximum index key width
BOUNDED_INDEX_KEY_ENGINES: Dict[str, bool] = {
	"mysql": True,
	"mariadb": True,
}


def register_index_key_capability(dialect_name: str, bounded: bool) -> None:
	BOUNDED_INDEX_KEY_ENGINES[dialect_name] = bounded


def has_bounded_index_keys(dialect_name: str) -> bool:
	return BOUNDED_INDEX_KEY_ENGINES.get(dialect_name, False)


def index_key_prefix_length(dialect: Dialect, prefix_length: Optional[int] = None) -> Optional[int]:
	"""Return the prefix length to index long columns with, or None for a full-value index."""
	if not has_bounded_index_keys(dialect.name):
		return None
	return prefix_length or settings.URL_INDEX_PREFIX_LENGTH


def prefix_index_options(column: str, prefix_length: Optional[int] = None) -> Dict[str, Any]:
	"""Dialect keyword arguments declaring a bounded-prefix index on ``column``.

	Each bounded engine reads only its own ``<dialect>_length`` keyword, so the
	options are safe to attach to a declarative Index shared by all engines.
	"""
	length = prefix_length or settings.URL_INDEX_PREFIX_LENGTH
	return {
		f"{name}_length": {column: length}
		for name, bounded in BOUNDED_INDEX_KEY_ENGINES.items()
		if bounded
	}


def url_index_options(dialect: Dialect, prefix_length: Optional[int] = None) -> Dict[str, Any]:
	"""Options for the url index on one concrete dialect (empty means full-value)."""
	length = index_key_prefix_length(dialect, prefix_length)
	if length is None:
		return {}
	return {f"{dialect.name}_length": {"url": length}}
