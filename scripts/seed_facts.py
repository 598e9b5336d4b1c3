"""
Create the facts database and load a handful of sample facts.

Usage:
    python scripts/seed_facts.py                       # seeds facts.sqlite
    python scripts/seed_facts.py --db /data/facts.sqlite
    python scripts/seed_facts.py --force               # seed even if rows exist

Sample rows carry preset vote counts so the feed ordering and the disputed
marker are visible right away.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from api.database import _make_conn, init_db  # noqa: E402
from board.submission import validate_submission  # noqa: E402

_logger = logging.getLogger("seed_facts")
logging.basicConfig(
    format="%(asctime)s %(levelname)s %(message)s",
    level=logging.INFO,
)

_DEFAULT_DB = Path(os.environ.get("APP_DB_PATH", "facts.sqlite"))

# (text, source, category, interesting, mindblowing, false)
SAMPLE_FACTS: list[tuple[str, str, str, int, int, int]] = [
    (
        "React is being developed by Meta (formerly facebook)",
        "https://opensource.fb.com/",
        "technology", 24, 9, 4,
    ),
    (
        "Millennial dads spend 3 times as much time with their kids than their "
        "fathers spent with them. In 1982, 43% of fathers had never changed a "
        "diaper. Today, that number is down to 3%",
        "https://www.mother.ly/parenting/millennial-dads-spend-more-time-with-their-kids",
        "society", 11, 2, 0,
    ),
    (
        "Lisbon is the capital of Portugal",
        "https://en.wikipedia.org/wiki/Lisbon",
        "society", 8, 3, 1,
    ),
    (
        "Singapore's Changi Airport has an indoor waterfall taller than seven storeys",
        "https://www.jewelchangiairport.com/",
        "singapore", 5, 7, 0,
    ),
    (
        "Bananas are berries, but strawberries are not",
        "https://www.britannica.com/story/is-a-banana-a-berry",
        "science", 2, 1, 6,
    ),
]


def seed(db_path: Path, force: bool = False) -> int:
    """Create the schema and insert SAMPLE_FACTS.

    Args:
        db_path: SQLite database to create or extend.
        force: Insert even when the table already has rows.

    Returns:
        Number of rows inserted.
    """
    init_db(db_path)
    conn = _make_conn(db_path)
    try:
        existing = conn.execute("SELECT COUNT(*) FROM facts").fetchone()[0]
        if existing and not force:
            _logger.info("facts table already has %d rows; skipping (use --force)", existing)
            return 0
        inserted = 0
        for text, source, category, interesting, mindblowing, false in SAMPLE_FACTS:
            problems = validate_submission(text, source, category)
            if problems:
                _logger.warning("skipping invalid sample %r: %s", text[:40], problems)
                continue
            conn.execute(
                "INSERT INTO facts (text, source, category, votesInteresting, "
                "votesMindblowing, votesFalse) VALUES (?, ?, ?, ?, ?, ?)",
                (text, source, category, interesting, mindblowing, false),
            )
            inserted += 1
        conn.commit()
    finally:
        conn.close()
    _logger.info("inserted %d sample facts into %s", inserted, db_path)
    return inserted


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the fact store with sample facts.")
    parser.add_argument("--db", type=Path, default=_DEFAULT_DB,
                        help=f"SQLite database path (default: {_DEFAULT_DB})")
    parser.add_argument("--force", action="store_true",
                        help="Insert samples even if the table is not empty")
    args = parser.parse_args()
    seed(args.db, force=args.force)


if __name__ == "__main__":
    main()
