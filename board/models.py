"""
Fact data model and dispute derivation.

Store rows use camelCase vote column names (``votesInteresting`` etc.); the
Python side uses snake_case attributes.  ``Fact.from_row`` and
``Fact.to_dict`` convert between the two.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal

VoteColumn = Literal["votesInteresting", "votesMindblowing", "votesFalse"]

VOTES_INTERESTING = "votesInteresting"
VOTES_MINDBLOWING = "votesMindblowing"
VOTES_FALSE = "votesFalse"

# Display order of the vote buttons.
VOTE_COLUMNS: tuple[str, ...] = (VOTES_INTERESTING, VOTES_MINDBLOWING, VOTES_FALSE)

_ATTR_FOR_COLUMN = {
    VOTES_INTERESTING: "votes_interesting",
    VOTES_MINDBLOWING: "votes_mindblowing",
    VOTES_FALSE: "votes_false",
}

MAX_TEXT_LENGTH = 200
MAX_FETCH_LIMIT = 1000


def validate_vote_column(column: str) -> str:
    """Return *column* unchanged if it names a vote counter.

    Raises:
        ValueError: If the column is not one of VOTE_COLUMNS.
    """
    if column not in _ATTR_FOR_COLUMN:
        raise ValueError(
            f"Invalid vote column: '{column}'. "
            f"Must be one of: {', '.join(VOTE_COLUMNS)}"
        )
    return column


@dataclass(frozen=True)
class Fact:
    """A single user-submitted claim with its source link and vote counters."""
    id: int
    text: str
    source: str
    category: str
    votes_interesting: int = 0
    votes_mindblowing: int = 0
    votes_false: int = 0
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Fact:
        """Build a Fact from a store row (camelCase vote columns)."""
        return cls(
            id=row["id"],
            text=row["text"],
            source=row["source"],
            category=row["category"],
            votes_interesting=int(row.get(VOTES_INTERESTING) or 0),
            votes_mindblowing=int(row.get(VOTES_MINDBLOWING) or 0),
            votes_false=int(row.get(VOTES_FALSE) or 0),
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the store-row representation of this fact."""
        d: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "source": self.source,
            "category": self.category,
            VOTES_INTERESTING: self.votes_interesting,
            VOTES_MINDBLOWING: self.votes_mindblowing,
            VOTES_FALSE: self.votes_false,
        }
        if self.created_at is not None:
            d["created_at"] = self.created_at
        return d

    def votes(self, column: str) -> int:
        """Return the counter stored under a vote *column* name."""
        return getattr(self, _ATTR_FOR_COLUMN[validate_vote_column(column)])

    def with_votes(self, column: str, value: int) -> Fact:
        """Return a copy with one vote counter set to *value*."""
        return replace(self, **{_ATTR_FOR_COLUMN[validate_vote_column(column)]: value})

    @property
    def is_disputed(self) -> bool:
        return is_disputed(self)


def is_disputed(fact: Fact) -> bool:
    """True when false votes strictly outnumber interesting + mind-blowing."""
    return (fact.votes_interesting + fact.votes_mindblowing) < fact.votes_false
