"""Client-side interaction model of the fact board."""

from board.board import FactBoard
from board.categories import (
    ALL_CATEGORIES,
    CATEGORIES,
    DEFAULT_CATEGORY_COLOR,
    Category,
    category_color,
    category_names,
    filter_options,
    find_category,
)
from board.errors import MutationError, RetrievalError, StoreError
from board.models import VOTE_COLUMNS, Fact, is_disputed
from board.notify import LoggingNotifier, Notifier, RecordingNotifier
from board.retrieval import FactRetrieval, RetrievalOutcome
from board.state import AppState
from board.store import FactStore, HttpFactStore
from board.submission import (
    SubmissionForm,
    SubmissionOutcome,
    SubmissionPipeline,
    is_valid_http_url,
    validate_submission,
)
from board.voting import VoteOutcome, VoteTransaction

__all__ = [
    "FactBoard",
    "ALL_CATEGORIES", "CATEGORIES", "DEFAULT_CATEGORY_COLOR", "Category",
    "category_color", "category_names", "filter_options", "find_category",
    "MutationError", "RetrievalError", "StoreError",
    "VOTE_COLUMNS", "Fact", "is_disputed",
    "LoggingNotifier", "Notifier", "RecordingNotifier",
    "FactRetrieval", "RetrievalOutcome",
    "AppState",
    "FactStore", "HttpFactStore",
    "SubmissionForm", "SubmissionOutcome", "SubmissionPipeline",
    "is_valid_http_url", "validate_submission",
    "VoteOutcome", "VoteTransaction",
]
