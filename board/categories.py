"""
Category registry for the fact board.

The registry is a static, ordered list of topical categories.  Order matters:
it is the order of the filter controls and of the options in the submission
form's category selector.  The synthetic ``"all"`` pseudo-category is not a
registry entry; it only exists as a filter value meaning "no filter".
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"

# Used when a fact carries a category name the registry does not know.
DEFAULT_CATEGORY_COLOR = "#78716c"


@dataclass(frozen=True)
class Category:
    """A named topical grouping with its display color."""
    name: str
    color: str


CATEGORIES: tuple[Category, ...] = (
    Category("technology", "#3b82f6"),
    Category("science", "#16a34a"),
    Category("finance", "#ef4444"),
    Category("society", "#eab308"),
    Category("entertainment", "#db2777"),
    Category("health", "#14b8a6"),
    Category("history", "#f97316"),
    Category("news", "#8b5cf6"),
    Category("singapore", "#7074b7"),
)

_BY_NAME: dict[str, Category] = {c.name: c for c in CATEGORIES}


def category_names() -> list[str]:
    """Return registry names in display order."""
    return [c.name for c in CATEGORIES]


def find_category(name: str | None) -> Category | None:
    """Return the registry entry for *name*, or None on a miss."""
    if not name:
        return None
    return _BY_NAME.get(name)


def is_known_category(name: str | None) -> bool:
    return find_category(name) is not None


def is_valid_filter(name: str | None) -> bool:
    """True for ``"all"`` or any registry name."""
    return name == ALL_CATEGORIES or is_known_category(name)


def category_color(name: str | None) -> str:
    """Resolve the display color for a fact's category.

    A lookup miss does not fail the render: the default color is returned
    and the miss is logged, since it means the store holds a row whose
    category the registry no longer (or never did) list.
    """
    category = find_category(name)
    if category is None:
        logger.warning("category lookup miss name=%r; using default color", name)
        return DEFAULT_CATEGORY_COLOR
    return category.color


def filter_options() -> list[dict[str, str | None]]:
    """Return one filter control per category, preceded by the "all" control.

    Each entry is ``{"name", "label", "color"}``; the "all" control has no
    color of its own.
    """
    options: list[dict[str, str | None]] = [
        {"name": ALL_CATEGORIES, "label": "All", "color": None},
    ]
    for c in CATEGORIES:
        options.append({"name": c.name, "label": c.name, "color": c.color})
    return options


def form_options() -> list[dict[str, str]]:
    """Return the submission form's selector options (placeholder first)."""
    options = [{"value": "", "label": "Choose category:"}]
    options.extend({"value": c.name, "label": c.name.upper()} for c in CATEGORIES)
    return options
