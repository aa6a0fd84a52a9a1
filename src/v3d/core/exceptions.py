"""
Custom exceptions for v3d.

All v3d exceptions inherit from V3DError for easy catching.
"""

from typing import Any


class V3DError(Exception):
    """Base exception for all v3d errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(V3DError):
    """Raised when configuration is invalid or missing."""

    pass


class ConstructionError(V3DError):
    """
    Raised when a geometry cannot be built from its inputs.

    Examples are an empty point collection, a zero direction vector, collinear
    triangle points or coplanar tetrahedron points. No partial object is
    ever returned.
    """

    pass


class UnsupportedOperationError(V3DError, NotImplementedError):
    """
    Raised when a query is part of the contract but has no algorithm.

    This is distinct from a ``None`` result, which means "no intersection".
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        kinds: tuple[str, ...] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.operation = operation
        self.kinds = kinds or ()
