"""Base service class with common functionality for all services."""

from typing import Optional, Callable, TypeVar, Any
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.core.diagnostics import DiagnosticSink, LoggingDiagnosticSink

T = TypeVar("T")


class BaseService:
    """Base service class providing common functionality for all services.

    Provides:
    - Transaction handling with rollback
    - Structured diagnostics with correlation ID
    """

    def __init__(self, correlation_id: Optional[str] = None, diagnostics: Optional[DiagnosticSink] = None):
        """Initialize base service.

        Args:
            correlation_id: Optional request correlation ID for logging
            diagnostics: Sink for operational messages; defaults to a logger named after the service
        """
        self.correlation_id = correlation_id
        self.diagnostics = diagnostics or LoggingDiagnosticSink(self.__class__.__name__)

    def run_in_transaction(self, db: Session, operation: Callable[[], T]) -> T:
        """Execute operation within a database transaction.

        Commits on success, rolls back on any exception.

        Args:
            db: Database session to use for the transaction
            operation: Callable that performs database operations

        Returns:
            Result of the operation

        Raises:
            Exception: Re-raises any exception from the operation after rollback
        """
        try:
            result = operation()
            db.commit()
            return result
        except SQLAlchemyError as e:
            db.rollback()
            self.diagnostics.error(
                "Database error occurred, transaction rolled back",
                e,
                correlation_id=self.correlation_id,
                service=self.__class__.__name__
            )
            raise
        except Exception as e:
            db.rollback()
            self.diagnostics.error(
                "Unexpected error occurred, transaction rolled back",
                e,
                correlation_id=self.correlation_id,
                service=self.__class__.__name__
            )
            raise

    def log_operation(self, operation: str, **kwargs: Any) -> None:
        """Log service operation with structured fields.

        Args:
            operation: Name of the operation being performed
            **kwargs: Additional fields to include in log
        """
        self.diagnostics.info(
            f"Service operation: {operation}",
            correlation_id=self.correlation_id,
            service=self.__class__.__name__,
            operation=operation,
            **kwargs
        )
