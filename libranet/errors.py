"""
LibraNet Errors
=================
Error taxonomy for the lending core.

All errors are raised synchronously to the immediate caller.
Nothing is retried internally. A failed operation leaves no
partial mutation behind.
"""

from __future__ import annotations

from typing import Any, Optional


class LibraryError(Exception):
    """Base error for all LibraNet operations."""
    pass


class InvalidDuration(LibraryError):
    """Duration text is empty, blank, or contains no recognizable token."""

    def __init__(self, text: Optional[str], reason: str = ""):
        self.text = text
        self.reason = reason
        detail = reason or "could not parse duration"
        super().__init__(f"Invalid duration {text!r}: {detail}.")


class ItemNotAvailable(LibraryError):
    """Borrow attempted on an item that is already on loan."""

    def __init__(self, item_id: Any):
        self.item_id = item_id
        super().__init__(f"Item {item_id} is not available.")


class InvalidArgument(LibraryError, ValueError):
    """Construction-time invariant violation."""
    pass


class UnsupportedOperation(LibraryError):
    """Kind-specific action requested on an item of another kind."""

    def __init__(self, item_id: Any, operation: str, kind: str):
        self.item_id = item_id
        self.operation = operation
        self.kind = kind
        super().__init__(
            f"Item {item_id} of kind {kind} does not support '{operation}'."
        )


class ItemNotFound(LibraryError, LookupError):
    """No item with the given id is registered in the catalog."""

    def __init__(self, item_id: Any):
        self.item_id = item_id
        super().__init__(f"Item {item_id} not found in catalog.")
