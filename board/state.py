"""
Application state container for the fact board.

``AppState`` is the single owner of the feed's mutable state.  Every change
goes through one of its named transitions, each of which is atomic with
respect to the event loop (no awaits inside) and notifies subscribers once.

The fact collection is stored as a tuple so that readers holding a previous
snapshot never observe a later mutation.  Its order is fixed at fetch time
(``votesInteresting`` descending); votes and submissions never re-sort it,
so a fact that gains votes keeps its position until the next retrieval.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from board.categories import ALL_CATEGORIES, is_valid_filter
from board.models import MAX_FETCH_LIMIT, Fact

logger = logging.getLogger(__name__)

Listener = Callable[["AppState", str], None]


class AppState:
    """Holds current category, loading flag, form visibility and the facts."""

    def __init__(self, current_category: str = ALL_CATEGORIES) -> None:
        if not is_valid_filter(current_category):
            raise ValueError(f"Unknown category filter: '{current_category}'")
        self.current_category = current_category
        self.facts: tuple[Fact, ...] = ()
        self.is_loading = False
        self.show_form = False
        self._request_token = 0
        self._listeners: list[Listener] = []

    # ── Subscriptions ─────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener(state, transition_name)*; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, transition: str) -> None:
        for listener in list(self._listeners):
            listener(self, transition)

    # ── Fact collection transitions ───────────────────────────────────────────

    def replace_facts(self, facts: Iterable[Fact]) -> None:
        """Replace the whole collection (retrieval result, possibly empty)."""
        new_facts = tuple(facts)
        if len(new_facts) > MAX_FETCH_LIMIT:
            raise ValueError(
                f"Fact collection exceeds {MAX_FETCH_LIMIT} items ({len(new_facts)})"
            )
        self.facts = new_facts
        self._emit("replace_facts")

    def prepend_fact(self, fact: Fact) -> None:
        """Put a newly confirmed fact at the front of the collection.

        A full collection drops its last (lowest-ranked) fact to stay within
        MAX_FETCH_LIMIT.
        """
        self.facts = ((fact,) + self.facts)[:MAX_FETCH_LIMIT]
        self._emit("prepend_fact")

    def replace_fact_by_id(self, fact: Fact) -> bool:
        """Swap the element whose id matches *fact.id* in place.

        Returns False (and leaves the collection untouched) when no element
        has that id, e.g. because a retrieval replaced the collection while
        the vote was in flight.
        """
        for index, existing in enumerate(self.facts):
            if existing.id == fact.id:
                self.facts = self.facts[:index] + (fact,) + self.facts[index + 1:]
                self._emit("replace_fact_by_id")
                return True
        logger.debug("replace_fact_by_id: id=%s not in collection", fact.id)
        return False

    def find_fact(self, fact_id: int) -> Fact | None:
        for fact in self.facts:
            if fact.id == fact_id:
                return fact
        return None

    # ── Flag transitions ──────────────────────────────────────────────────────

    def set_loading(self, value: bool) -> None:
        self.is_loading = bool(value)
        self._emit("set_loading")

    def set_form_visible(self, value: bool) -> None:
        self.show_form = bool(value)
        self._emit("set_form_visible")

    def toggle_form(self) -> bool:
        """Flip form visibility and return the new value."""
        self.set_form_visible(not self.show_form)
        return self.show_form

    def set_category(self, name: str) -> None:
        if not is_valid_filter(name):
            raise ValueError(f"Unknown category filter: '{name}'")
        self.current_category = name
        self._emit("set_category")

    # ── Retrieval request tokens ──────────────────────────────────────────────

    def issue_request_token(self) -> int:
        """Return a new retrieval token, newer than every token issued before."""
        self._request_token += 1
        return self._request_token

    def is_latest_request(self, token: int) -> bool:
        return token == self._request_token
