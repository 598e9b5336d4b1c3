"""
FactBoard: wires the state container, the store and the three flows.

Each user action maps to one coroutine or method:

    mount()                 initial retrieval for the current category
    select_category(name)   set the filter and retrieve again
    toggle_form()           show / hide the submission form
    submit()                run the submission pipeline on ``self.form``
    vote(fact_id, column)   run one vote transaction

Nothing is cancelled when a newer action supersedes an older one; stale
retrievals are discarded by request token inside ``FactRetrieval``.
"""

from __future__ import annotations

import logging

from board.categories import ALL_CATEGORIES
from board.models import MAX_FETCH_LIMIT
from board.notify import LoggingNotifier, Notifier
from board.retrieval import FactRetrieval, RetrievalOutcome
from board.state import AppState
from board.store import FactStore, HttpFactStore
from board.submission import SubmissionForm, SubmissionOutcome, SubmissionPipeline
from board.view import FactCard, feed_cards, feed_message
from board.voting import VoteOutcome, VoteTransaction
from utils.config import BoardConfig

logger = logging.getLogger(__name__)


class FactBoard:
    """Client-side interaction model of the fact board."""

    def __init__(self, store: FactStore, notifier: Notifier | None = None,
                 state: AppState | None = None,
                 fetch_limit: int = MAX_FETCH_LIMIT) -> None:
        self.store = store
        self.notifier = notifier or LoggingNotifier()
        self.state = state or AppState()
        self.form = SubmissionForm()
        self.retrieval = FactRetrieval(self.state, store, self.notifier, limit=fetch_limit)
        self.submission = SubmissionPipeline(self.state, store)
        self.voting = VoteTransaction(self.state, store)

    @classmethod
    def from_config(cls, config: BoardConfig | None = None,
                    notifier: Notifier | None = None) -> FactBoard:
        """Build a board talking HTTP to the fact API described by *config*."""
        config = config or BoardConfig.from_env()
        return cls(HttpFactStore.from_config(config), notifier=notifier,
                   fetch_limit=config.fetch_limit)

    async def mount(self) -> RetrievalOutcome:
        return await self.retrieval.load()

    async def select_category(self, name: str = ALL_CATEGORIES) -> RetrievalOutcome:
        self.state.set_category(name)
        return await self.retrieval.load(name)

    def toggle_form(self) -> bool:
        return self.state.toggle_form()

    async def submit(self, text: str | None = None, source: str | None = None,
                     category: str | None = None) -> SubmissionOutcome:
        """Submit the form, optionally filling fields first."""
        if text is not None:
            self.form.text = text
        if source is not None:
            self.form.source = source
        if category is not None:
            self.form.category = category
        return await self.submission.submit(self.form)

    async def vote(self, fact_id: int, column: str) -> VoteOutcome:
        return await self.voting.vote(fact_id, column)

    def cards(self) -> list[FactCard]:
        return feed_cards(self.state, self.voting)

    def message(self) -> str:
        return feed_message(self.state)

    async def aclose(self) -> None:
        """Release the store's resources if it holds any."""
        close = getattr(self.store, "aclose", None)
        if close is not None:
            await close()
