"""Repository interfaces for threadlens.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from threadlens.domain.repository.comment import CommentRepository

__all__ = [
    "CommentRepository",
]
