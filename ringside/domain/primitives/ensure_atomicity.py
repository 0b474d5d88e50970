"""Atomic operation primitive.

A context manager that runs registered rollback handlers when the block
raises. Handlers run in reverse registration order, then the original
exception propagates.

Usage:
    with AtomicOperationContext() as ctx:
        ctx.add_rollback(restore_snapshot)
        apply_writes()
        # On exception: restore_snapshot called, exception re-raised
"""

from collections.abc import Callable
from types import TracebackType

import structlog

log = structlog.get_logger()

RollbackHandler = Callable[[], None]


class AtomicOperationContext:
    """Context manager ensuring all-or-nothing operations.

    Rollback handlers are called in reverse order (LIFO) if an exception
    occurs. A failing handler is logged and the remaining handlers still
    run. The original exception is always re-raised.

    Attributes:
        _rollback_handlers: Registered rollback handlers.
    """

    def __init__(self) -> None:
        self._rollback_handlers: list[RollbackHandler] = []

    def add_rollback(self, handler: RollbackHandler) -> None:
        """Register a rollback handler to be called on failure.

        Args:
            handler: Callable taking no arguments that undoes a write.
        """
        self._rollback_handlers.append(handler)

    def __enter__(self) -> "AtomicOperationContext":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        """Exit the context, executing rollbacks on exception.

        Returns:
            False, so the original exception always propagates.
        """
        if exc_val is not None:
            log.info(
                "atomic_operation_failed",
                error=str(exc_val),
                error_type=exc_type.__name__ if exc_type else "Unknown",
                rollback_count=len(self._rollback_handlers),
            )

            for handler in reversed(self._rollback_handlers):
                try:
                    handler()
                except Exception as rollback_error:
                    log.error(
                        "rollback_handler_failed",
                        rollback_error=str(rollback_error),
                        rollback_error_type=type(rollback_error).__name__,
                    )

        return False
