"""Exception hierarchy for prefix-routed resource bundles."""

from __future__ import annotations


class BundleRouterError(Exception):
    """Base exception for bundle router errors."""
    pass


class InvalidArgument(BundleRouterError, ValueError):
    """A setup call received a malformed argument (e.g. a blank separator)."""

    def __init__(self, argument: str, message: str | None = None):
        """Initialize InvalidArgument exception.

        Args:
            argument: Name of the rejected parameter
            message: Optional custom message (defaults to a generic message)
        """
        self.argument = argument
        super().__init__(message or f"Invalid argument '{argument}': cannot be None or empty")


class NotFound(BundleRouterError, KeyError):
    """No registered store provides the requested key.

    Subclasses ``KeyError`` so ``router[key]`` behaves like a mapping lookup.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the argument
        return f"The resource with key {self.key!r} was not found"


class LayoutError(BundleRouterError):
    """A seed or layout file could not be read or is malformed."""
    pass
