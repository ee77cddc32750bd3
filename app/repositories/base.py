"""Base repository class with common append-only operations."""

import logging
from abc import ABC
from typing import Generic, TypeVar, Type, Optional, Any, Dict
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.db.base_class import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType")


class BaseRepository(Generic[ModelType], ABC):
    """Base repository class providing common data operations.

    Provides:
    - Create and read operations (no update or delete: rows are append-only)
    - Equality filtering for counts
    - Structured logging for data operations
    """

    def __init__(self, db: Session, model: Type[ModelType], correlation_id: Optional[str] = None):
        """Initialize repository with database session and model type.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
            correlation_id: Optional request correlation ID for logging
        """
        self.db = db
        self.model = model
        self.correlation_id = correlation_id
        self.logger = logging.getLogger(self.__class__.__name__)

    def create(self, obj_in: CreateSchemaType, **kwargs: Any) -> ModelType:
        """Create a new record in the database.

        The row is flushed so storage-assigned columns (id, server defaults)
        are populated; committing is left to the caller.

        Args:
            obj_in: Pydantic model or dict with creation data
            **kwargs: Additional fields to set on the model

        Returns:
            Created model instance

        Raises:
            SQLAlchemyError: On database operation failure
        """
        try:
            if hasattr(obj_in, 'model_dump'):
                # Pydantic model
                obj_data = obj_in.model_dump(exclude_unset=True)
            else:
                # Dictionary
                obj_data = dict(obj_in)

            obj_data.update(kwargs)
            db_obj = self.model(**obj_data)

            self.db.add(db_obj)
            self.db.flush()
            self.db.refresh(db_obj)

            self._log_operation("create", model=self.model.__name__, id=getattr(db_obj, 'id', None))
            return db_obj

        except SQLAlchemyError as e:
            self.logger.error(
                f"Failed to create {self.model.__name__}",
                extra={
                    "correlation_id": self.correlation_id,
                    "repository": self.__class__.__name__,
                    "error": str(e)
                }
            )
            raise

    def get_by_id(self, id: int) -> Optional[ModelType]:
        """Get a record by ID.

        Args:
            id: Record ID

        Returns:
            Model instance or None if not found
        """
        result = self.db.query(self.model).filter(self.model.id == id).first()
        self._log_operation("get_by_id", model=self.model.__name__, id=id, found=result is not None)
        return result

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records with optional equality filtering.

        Args:
            filters: Dictionary of field filters; unknown fields are ignored

        Returns:
            Number of matching records
        """
        query = self.db.query(self.model)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.filter(getattr(self.model, field) == value)

        result = query.count()
        self._log_operation("count", model=self.model.__name__, count=result)
        return result

    def _log_operation(self, operation: str, **kwargs: Any) -> None:
        """Log repository operation with structured fields.

        Args:
            operation: Name of the operation being performed
            **kwargs: Additional fields to include in log
        """
        log_data = {
            "correlation_id": self.correlation_id,
            "repository": self.__class__.__name__,
            "operation": operation,
            **kwargs
        }
        self.logger.info(f"Repository operation: {operation}", extra=log_data)
