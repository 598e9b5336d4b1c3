"""
Renderer-neutral view models for the fact board.

These functions turn state into plain data a template, terminal UI or test
can render.  They hold no state and never mutate it.
"""

from __future__ import annotations

from dataclasses import dataclass

from board.categories import category_color
from board.models import Fact
from board.state import AppState
from board.voting import VoteTransaction

EMPTY_FEED_MESSAGE = "No facts for this category yet. Create the first one?"
LOADING_MESSAGE = "Loading..."


@dataclass(frozen=True)
class FactCard:
    """Everything needed to draw one fact."""
    id: int
    text: str
    source: str
    category: str
    color: str
    disputed: bool
    votes_interesting: int
    votes_mindblowing: int
    votes_false: int
    buttons_disabled: bool


def fact_card(fact: Fact, voting: VoteTransaction | None = None) -> FactCard:
    return FactCard(
        id=fact.id,
        text=fact.text,
        source=fact.source,
        category=fact.category,
        color=category_color(fact.category),
        disputed=fact.is_disputed,
        votes_interesting=fact.votes_interesting,
        votes_mindblowing=fact.votes_mindblowing,
        votes_false=fact.votes_false,
        buttons_disabled=voting.is_updating(fact.id) if voting else False,
    )


def feed_cards(state: AppState, voting: VoteTransaction | None = None) -> list[FactCard]:
    """Cards in collection order; empty while the feed is loading."""
    if state.is_loading:
        return []
    return [fact_card(f, voting) for f in state.facts]


def feed_message(state: AppState) -> str:
    """The single status line shown under (or instead of) the feed."""
    if state.is_loading:
        return LOADING_MESSAGE
    if not state.facts:
        return EMPTY_FEED_MESSAGE
    return f"There are {len(state.facts)} facts in the database. Add your own!"


def form_toggle_label(state: AppState) -> str:
    return "Close" if state.show_form else "Share a fact"
