"""
Error types for the fact board.

Store clients raise ``StoreError``.  The flows never let it escape: they wrap
it in ``RetrievalError`` or ``MutationError`` and return it inside an explicit
outcome object, together with a severity classification:

    recoverable: show (or ignore) and keep going; local state is intact
    escalate:    the store itself is failing (5xx / unreachable); a caller
                  may want to stop issuing requests or alert an operator
"""

from __future__ import annotations

RECOVERABLE = "recoverable"
ESCALATE = "escalate"


class StoreError(Exception):
    """A store operation failed.

    Args:
        message: Human-readable description.
        status_code: HTTP status returned by the store, or None when the
            request never got an answer (connection error, bad payload).
        detail: Store-provided error detail, if any.
    """

    def __init__(self, message: str, status_code: int | None = None,
                 detail: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    @property
    def is_server_fault(self) -> bool:
        """True for 5xx answers and for requests that never got an answer."""
        return self.status_code is None or self.status_code >= 500


class BoardError(Exception):
    """Base class for errors returned by the board flows."""

    def __init__(self, message: str, cause: StoreError | None = None,
                 severity: str = RECOVERABLE) -> None:
        super().__init__(message)
        self.cause = cause
        self.severity = severity

    @property
    def needs_escalation(self) -> bool:
        return self.severity == ESCALATE


class RetrievalError(BoardError):
    """Fact retrieval failed; the feed keeps its last known-good facts."""

    @classmethod
    def from_store_error(cls, exc: StoreError) -> RetrievalError:
        return cls("There was a problem getting data!", cause=exc,
                   severity=RECOVERABLE)


class MutationError(BoardError):
    """A submission or vote failed; nothing was committed locally."""

    @classmethod
    def from_store_error(cls, action: str, exc: StoreError) -> MutationError:
        severity = ESCALATE if exc.is_server_fault else RECOVERABLE
        return cls(f"{action} failed: {exc}", cause=exc, severity=severity)
