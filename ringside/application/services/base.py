"""Base service logging mixin.

This module provides the LoggingMixin class for standardized structured
logging across all application services.

Usage:
    from ringside.application.services.base import LoggingMixin

    class ChampionshipService(LoggingMixin):
        def __init__(self, repository: RosterRepositoryProtocol) -> None:
            self._repository = repository
            self._init_logger(component="championships")

        def award(self, title_id: UUID, champion: EntityRef, at: datetime) -> None:
            log = self._log_operation("award", title_id=str(title_id))
            log.info("award_started", champion=str(champion))
            # ... close the current reign, open the new one ...
            log.info("award_completed")
"""

import structlog

from ringside.application.services.correlation import get_correlation_id


class LoggingMixin:
    """Mixin providing structured logging for services.

    The logger is bound with:
    - service: The class name of the service
    - component: The component type (default: "roster")

    Each operation gets:
    - operation: The name of the operation being performed
    - correlation_id: From context, for tracing one caller request
    - Any additional context passed to _log_operation()

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "roster") -> None:
        """Initialize the logger with service name binding.

        Should be called in __init__ after setting up dependencies.

        Args:
            component: The component type for log categorization.
        """
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create operation-scoped logger with correlation ID.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind to the logger.

        Returns:
            BoundLogger with operation and correlation context.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
