"""Tests for board/models.py: Fact conversion and dispute derivation."""
import pytest

from board.models import (
    VOTE_COLUMNS,
    Fact,
    is_disputed,
    validate_vote_column,
)


def _fact(interesting, mindblowing, false):
    return Fact(id=1, text="t", source="https://example.com", category="news",
                votes_interesting=interesting, votes_mindblowing=mindblowing,
                votes_false=false)


class TestDispute:
    def test_false_votes_outnumber(self):
        assert is_disputed(_fact(1, 0, 5)) is True

    def test_positive_votes_win(self):
        assert is_disputed(_fact(3, 2, 4)) is False

    def test_tie_is_not_disputed(self):
        assert is_disputed(_fact(2, 0, 2)) is False

    def test_property_recomputes(self):
        fact = _fact(0, 0, 0)
        assert not fact.is_disputed
        assert fact.with_votes("votesFalse", 1).is_disputed


class TestFactRows:
    def test_from_row_reads_camel_case(self):
        fact = Fact.from_row({
            "id": 7, "text": "x", "source": "https://a.b", "category": "news",
            "votesInteresting": 3, "votesMindblowing": 2, "votesFalse": 1,
            "created_at": "2024-01-01T00:00:00Z",
        })
        assert fact.votes_interesting == 3
        assert fact.votes_mindblowing == 2
        assert fact.votes_false == 1
        assert fact.created_at == "2024-01-01T00:00:00Z"

    def test_from_row_defaults_missing_votes(self):
        fact = Fact.from_row({"id": 1, "text": "x", "source": "s", "category": "news"})
        assert (fact.votes_interesting, fact.votes_mindblowing, fact.votes_false) == (0, 0, 0)

    def test_to_dict_omits_missing_timestamp(self):
        d = _fact(1, 2, 3).to_dict()
        assert d["votesInteresting"] == 1
        assert d["votesFalse"] == 3
        assert "created_at" not in d

    def test_from_row_missing_id_raises(self):
        with pytest.raises(KeyError):
            Fact.from_row({"text": "x", "source": "s", "category": "news"})


class TestVoteColumns:
    def test_three_columns_in_button_order(self):
        assert VOTE_COLUMNS == ("votesInteresting", "votesMindblowing", "votesFalse")

    @pytest.mark.parametrize("column", VOTE_COLUMNS)
    def test_valid(self, column):
        assert validate_vote_column(column) == column

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid vote column"):
            validate_vote_column("votesBoring")

    def test_with_votes_leaves_other_counters(self):
        fact = _fact(1, 2, 3)
        bumped = fact.with_votes("votesMindblowing", 9)
        assert bumped.votes_mindblowing == 9
        assert bumped.votes_interesting == 1
        assert bumped.votes_false == 3
        assert fact.votes_mindblowing == 2
