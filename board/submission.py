"""
Submission pipeline: validate a new fact client-side, insert it, show it.

Validation checks (all must pass):

    text      non-empty, at most MAX_TEXT_LENGTH characters
    source    absolute http(s) URL with a host
    category  non-empty registry name

A submission that fails validation changes nothing: no store call, the form
stays open with its fields intact.  The failed checks are returned in the
outcome but not pushed to the notifier, so the form itself shows no
per-field feedback unless the caller chooses to render ``outcome.problems``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pydantic import HttpUrl, TypeAdapter, ValidationError

from board.categories import is_known_category
from board.errors import MutationError, StoreError
from board.models import MAX_TEXT_LENGTH, Fact
from board.state import AppState
from board.store import FactStore

logger = logging.getLogger(__name__)

# Validation problem codes
TEXT_EMPTY = "text_empty"
TEXT_TOO_LONG = "text_too_long"
SOURCE_INVALID = "source_invalid"
CATEGORY_MISSING = "category_missing"
CATEGORY_UNKNOWN = "category_unknown"

_HTTP_URL = TypeAdapter(HttpUrl)


def is_valid_http_url(value: str | None) -> bool:
    """True if *value* parses as an absolute URL with scheme http or https."""
    if not value:
        return False
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_submission(text: str, source: str, category: str) -> list[str]:
    """Return the list of failed checks; empty means the fact may be sent."""
    problems: list[str] = []
    if not text:
        problems.append(TEXT_EMPTY)
    elif len(text) > MAX_TEXT_LENGTH:
        problems.append(TEXT_TOO_LONG)
    if not is_valid_http_url(source):
        problems.append(SOURCE_INVALID)
    if not category:
        problems.append(CATEGORY_MISSING)
    elif not is_known_category(category):
        problems.append(CATEGORY_UNKNOWN)
    return problems


@dataclass
class SubmissionForm:
    """Field values and the uploading flag of the "share a fact" form."""
    text: str = ""
    source: str = ""
    category: str = ""
    is_uploading: bool = False

    @property
    def remaining_chars(self) -> int:
        """Characters left before the text limit (negative when over)."""
        return MAX_TEXT_LENGTH - len(self.text)

    @property
    def inputs_disabled(self) -> bool:
        return self.is_uploading

    def reset(self) -> None:
        self.text = ""
        self.source = ""
        self.category = ""


@dataclass
class SubmissionOutcome:
    """Result of one submit attempt."""
    fact: Fact | None = None
    problems: list[str] = field(default_factory=list)
    error: MutationError | None = None
    rejected_busy: bool = False

    @property
    def ok(self) -> bool:
        return self.fact is not None


class SubmissionPipeline:
    """Validates the form, inserts the fact, and prepends the confirmed row.

    Args:
        state: The state container to mutate.
        store: Store capability used for ``insert_fact``.
    """

    def __init__(self, state: AppState, store: FactStore) -> None:
        self.state = state
        self.store = store

    async def submit(self, form: SubmissionForm) -> SubmissionOutcome:
        if form.is_uploading:
            return SubmissionOutcome(rejected_busy=True)

        problems = validate_submission(form.text, form.source, form.category)
        if problems:
            logger.debug("submission rejected problems=%s", ",".join(problems))
            return SubmissionOutcome(problems=problems)

        form.is_uploading = True
        try:
            fact = await self.store.insert_fact(form.text, form.source, form.category)
        except StoreError as exc:
            logger.warning("submission failed category=%s error=%s", form.category, exc)
            return SubmissionOutcome(error=MutationError.from_store_error("Submission", exc))
        finally:
            form.is_uploading = False

        self.state.prepend_fact(fact)
        form.reset()
        self.state.set_form_visible(False)
        logger.info("fact submitted id=%s category=%s", fact.id, fact.category)
        return SubmissionOutcome(fact=fact)
