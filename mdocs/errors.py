"""Error types raised by the mdocs pipeline."""

from __future__ import annotations


class MdocsError(RuntimeError):
    """Base class for fatal errors that abort a run."""


class UsageError(MdocsError):
    """Raised when templates or the surrounding repository are malformed or ambiguous."""


class InternalError(MdocsError):
    """Raised when an invariant mdocs itself should guarantee does not hold."""


__all__ = ["InternalError", "MdocsError", "UsageError"]
