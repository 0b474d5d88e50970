"""Domain primitives."""

from ringside.domain.primitives.ensure_atomicity import AtomicOperationContext

__all__ = ["AtomicOperationContext"]
