"""
Fact endpoints.

GET  /api/v1/facts                        → facts, votesInteresting desc, capped
POST /api/v1/facts                        → insert a fact, return the stored row
POST /api/v1/facts/{id}/votes/{column}    → increment one vote counter atomically
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from api.database import FACT_COLUMNS, get_db, row_to_dict
from api.models import ErrorResponse, FactCreate, FactOut
from board.models import MAX_FETCH_LIMIT, VOTE_COLUMNS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/facts", tags=["facts"])

_VOTE_COLUMN_PATTERN = "^(" + "|".join(VOTE_COLUMNS) + ")$"


def _fetch_fact(conn: sqlite3.Connection, fact_id: int) -> dict | None:
    row = conn.execute(
        f"SELECT {FACT_COLUMNS} FROM facts WHERE id = ?", (fact_id,)
    ).fetchone()
    return row_to_dict(row) if row else None


@router.get(
    "",
    response_model=list[FactOut],
    summary="List facts",
    description="Facts ordered by interesting votes (highest first), optionally "
                "restricted to one category.  At most 1000 rows are returned.",
)
def list_facts(
    category: str | None = Query(None, description="Only facts in this category"),
    limit: int = Query(MAX_FETCH_LIMIT, ge=1, le=MAX_FETCH_LIMIT, description="Max rows"),
    conn: sqlite3.Connection = Depends(get_db),
) -> list[dict]:
    """Return facts, most interesting first."""
    sql = f"SELECT {FACT_COLUMNS} FROM facts"
    params: list = []
    if category is not None:
        sql += " WHERE category = ?"
        params.append(category)
    sql += " ORDER BY votesInteresting DESC, id ASC LIMIT ?"
    params.append(limit)
    rows = conn.execute(sql, params).fetchall()
    return [row_to_dict(r) for r in rows]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=FactOut,
    responses={
        201: {"description": "Fact stored; body is the confirmed row"},
        422: {"description": "Body is missing a field or has the wrong shape"},
    },
    summary="Submit a fact",
)
def create_fact(fact: FactCreate, conn: sqlite3.Connection = Depends(get_db)) -> dict:
    """Insert a fact with zeroed vote counters and return the stored row."""
    cur = conn.execute(
        "INSERT INTO facts (text, source, category) VALUES (?, ?, ?)",
        (fact.text, fact.source, fact.category),
    )
    conn.commit()
    row = _fetch_fact(conn, cur.lastrowid)
    logger.info("fact created id=%s category=%s", cur.lastrowid, fact.category)
    return row


@router.post(
    "/{fact_id}/votes/{column}",
    response_model=FactOut,
    responses={
        404: {"model": ErrorResponse, "description": "No fact with this id"},
        422: {"description": "Unknown vote column"},
    },
    summary="Vote on a fact",
)
def vote_fact(
    fact_id: int = Path(..., ge=1, description="Fact id"),
    column: str = Path(..., pattern=_VOTE_COLUMN_PATTERN,
                       description="votesInteresting | votesMindblowing | votesFalse"),
    conn: sqlite3.Connection = Depends(get_db),
) -> dict:
    """Increment one vote counter and return the updated row.

    The increment happens inside SQLite (``col = col + 1``), so concurrent
    votes from different clients never overwrite each other.
    """
    # column is whitelisted by the path pattern
    cur = conn.execute(
        f"UPDATE facts SET {column} = {column} + 1 WHERE id = ?", (fact_id,)
    )
    if cur.rowcount == 0:
        conn.rollback()
        raise HTTPException(status_code=404, detail=f"Fact {fact_id} not found")
    row = _fetch_fact(conn, fact_id)
    conn.commit()
    return row
