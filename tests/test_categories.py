"""Tests for board/categories.py: the static category registry."""
import logging

from board.categories import (
    ALL_CATEGORIES,
    CATEGORIES,
    DEFAULT_CATEGORY_COLOR,
    category_color,
    category_names,
    filter_options,
    find_category,
    form_options,
    is_known_category,
    is_valid_filter,
)


class TestRegistry:
    def test_order_is_fixed(self):
        assert category_names() == [
            "technology", "science", "finance", "society", "entertainment",
            "health", "history", "news", "singapore",
        ]

    def test_names_are_unique(self):
        names = category_names()
        assert len(names) == len(set(names))

    def test_all_is_not_a_registry_entry(self):
        assert find_category(ALL_CATEGORIES) is None
        assert not is_known_category(ALL_CATEGORIES)

    def test_find_category(self):
        cat = find_category("science")
        assert cat is not None
        assert cat.color == "#16a34a"

    def test_find_empty_or_none(self):
        assert find_category("") is None
        assert find_category(None) is None

    def test_valid_filter(self):
        assert is_valid_filter("all")
        assert is_valid_filter("history")
        assert not is_valid_filter("sports")
        assert not is_valid_filter("")


class TestCategoryColor:
    def test_known_category(self):
        assert category_color("technology") == "#3b82f6"

    def test_lookup_miss_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="board.categories"):
            assert category_color("sports") == DEFAULT_CATEGORY_COLOR
        assert "lookup miss" in caplog.text

    def test_lookup_miss_on_none(self):
        assert category_color(None) == DEFAULT_CATEGORY_COLOR


class TestControls:
    def test_filter_options_start_with_all(self):
        options = filter_options()
        assert options[0] == {"name": "all", "label": "All", "color": None}
        assert [o["name"] for o in options[1:]] == category_names()
        assert len(options) == len(CATEGORIES) + 1

    def test_form_options_have_placeholder(self):
        options = form_options()
        assert options[0]["value"] == ""
        assert options[1] == {"value": "technology", "label": "TECHNOLOGY"}
