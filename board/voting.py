"""
Vote transactions: increment one vote column of one fact.

The new count comes from the store's confirmed row, never from a local
``+ 1``; concurrent votes from other clients are reconciled by the store.
While a vote is in flight the fact is marked as updating, which disables
its three vote buttons.  Other facts stay votable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from board.errors import MutationError, StoreError
from board.models import Fact, validate_vote_column
from board.state import AppState
from board.store import FactStore

logger = logging.getLogger(__name__)


@dataclass
class VoteOutcome:
    """Result of one vote click."""
    fact_id: int
    column: str
    fact: Fact | None = None
    error: MutationError | None = None
    rejected_busy: bool = False
    applied: bool = False

    @property
    def ok(self) -> bool:
        return self.fact is not None


class VoteTransaction:
    """Issues per-fact vote increments and applies the confirmed rows.

    Args:
        state: The state container to mutate.
        store: Store capability used for ``increment_vote``.
    """

    def __init__(self, state: AppState, store: FactStore) -> None:
        self.state = state
        self.store = store
        self._updating: set[int] = set()

    def is_updating(self, fact_id: int) -> bool:
        """True while a vote on *fact_id* is in flight (its buttons are disabled)."""
        return fact_id in self._updating

    async def vote(self, fact_id: int, column: str) -> VoteOutcome:
        validate_vote_column(column)
        if fact_id in self._updating:
            return VoteOutcome(fact_id, column, rejected_busy=True)

        self._updating.add(fact_id)
        try:
            fact = await self.store.increment_vote(fact_id, column)
        except StoreError as exc:
            logger.warning("vote failed id=%s column=%s error=%s", fact_id, column, exc)
            return VoteOutcome(fact_id, column,
                               error=MutationError.from_store_error("Vote", exc))
        finally:
            self._updating.discard(fact_id)

        applied = self.state.replace_fact_by_id(fact)
        logger.debug("vote applied id=%s column=%s value=%s applied=%s",
                     fact_id, column, fact.votes(column), applied)
        return VoteOutcome(fact_id, column, fact=fact, applied=applied)
