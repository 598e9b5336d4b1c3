"""
Fact retrieval: load the feed for the current category.

One retrieval = one ``fetch_facts`` call.  The state container hands out a
request token before the call; when the response lands, it is applied only
if its token is still the latest one.  A superseded response is dropped
whole: it does not replace the facts or alert, and it leaves the loading
flag to the newer request.  The latest request clears the flag however it
ends, including on an unexpected exception from the store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from board.categories import ALL_CATEGORIES
from board.errors import RetrievalError, StoreError
from board.models import MAX_FETCH_LIMIT, Fact
from board.notify import Notifier
from board.state import AppState
from board.store import FactStore

logger = logging.getLogger(__name__)


@dataclass
class RetrievalOutcome:
    """Result of one retrieval.

    ``stale`` is True when a newer retrieval was issued before this one
    resolved; in that case nothing was applied, whatever ``error`` says.
    """
    token: int
    category: str
    facts: list[Fact] = field(default_factory=list)
    error: RetrievalError | None = None
    stale: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.stale


class FactRetrieval:
    """Fetches facts for a category and replaces the state's collection.

    Args:
        state: The state container to mutate.
        store: Store capability used for ``fetch_facts``.
        notifier: Receives the blocking alert when a retrieval fails.
        limit: Row cap, at most MAX_FETCH_LIMIT.
    """

    def __init__(self, state: AppState, store: FactStore, notifier: Notifier,
                 limit: int = MAX_FETCH_LIMIT) -> None:
        if not 1 <= limit <= MAX_FETCH_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_FETCH_LIMIT}")
        self.state = state
        self.store = store
        self.notifier = notifier
        self.limit = limit

    async def load(self, category: str | None = None) -> RetrievalOutcome:
        """Retrieve facts for *category* (default: the state's current one)."""
        category = category if category is not None else self.state.current_category
        category_filter = None if category == ALL_CATEGORIES else category

        token = self.state.issue_request_token()
        self.state.set_loading(True)
        logger.debug("retrieval start token=%d category=%s", token, category)

        try:
            facts = await self.store.fetch_facts(category_filter, limit=self.limit)
        except StoreError as exc:
            error = RetrievalError.from_store_error(exc)
            if not self.state.is_latest_request(token):
                logger.debug("discarding stale failed retrieval token=%d", token)
                return RetrievalOutcome(token, category, error=error, stale=True)
            logger.warning("retrieval failed category=%s error=%s", category, exc)
            self.notifier.alert(str(error))
            return RetrievalOutcome(token, category, error=error)
        else:
            if not self.state.is_latest_request(token):
                logger.debug("discarding stale retrieval token=%d category=%s rows=%d",
                             token, category, len(facts))
                return RetrievalOutcome(token, category, facts=facts, stale=True)
            self.state.replace_facts(facts[:self.limit])
            logger.info("retrieved %d facts category=%s", len(facts), category)
            return RetrievalOutcome(token, category, facts=list(self.state.facts))
        finally:
            if self.state.is_latest_request(token):
                self.state.set_loading(False)
