"""Paginated assessment progress as an explicit state machine.

NotStarted -> InProgress(page) -> Submitted -> Scored

The object owns no I/O; routes rebuild it from a persisted draft row, apply
one transition and write the resulting state back.
"""
from __future__ import annotations
import enum
import logging
import math
from typing import Dict, List, Mapping, Optional, Sequence

from app.core.spiritual_gifts_map import SpiritualGiftQuestion
from app.services.spiritual_gifts_scoring import (
    AssessmentScore,
    InvalidInput,
    MAX_RESPONSE,
    MIN_RESPONSE,
    score_assessment,
)

logger = logging.getLogger("app.assessment_progress")


class ProgressState(str, enum.Enum):
    not_started = "not_started"
    in_progress = "in_progress"
    submitted = "submitted"
    scored = "scored"


class InvalidTransition(ValueError):
    """Raised when an operation is not allowed in the current state."""


class IncompletePage(InvalidInput):
    """Raised when leaving a page that still has unanswered questions."""


class AssessmentProgress:
    def __init__(
        self,
        questions: Sequence[SpiritualGiftQuestion],
        page_size: int = 10,
        answers: Optional[Mapping[str, int]] = None,
        state: ProgressState | str = ProgressState.not_started,
        page: int = 0,
    ) -> None:
        if not questions:
            raise InvalidInput("no questions provided")
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.questions: List[SpiritualGiftQuestion] = list(questions)
        self.page_size = page_size
        self.answers: Dict[str, int] = dict(answers or {})
        self.state = ProgressState(state)
        # A stored page may predate a page size change
        self.page = min(max(page, 0), self.page_count - 1)
        self._ids = {q.id for q in self.questions}

    # -- helpers -------------------------------------------------------------
    @property
    def page_count(self) -> int:
        return math.ceil(len(self.questions) / self.page_size)

    @property
    def is_last_page(self) -> bool:
        return self.page >= self.page_count - 1

    @property
    def current_page_questions(self) -> List[SpiritualGiftQuestion]:
        start = self.page * self.page_size
        return self.questions[start:start + self.page_size]

    def unanswered_on_page(self) -> List[str]:
        return [q.id for q in self.current_page_questions if self.answers.get(q.id) is None]

    def _require(self, *states: ProgressState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise InvalidTransition(f"operation requires state {allowed}; current state is {self.state.value}")

    def _require_page_complete(self) -> None:
        missing = self.unanswered_on_page()
        if missing:
            raise IncompletePage(f"answer every question on page {self.page + 1} first: {', '.join(missing)}")

    # -- transitions ---------------------------------------------------------
    def start(self) -> None:
        self._require(ProgressState.not_started)
        self.state = ProgressState.in_progress
        self.page = 0

    def record_answers(self, answers: Mapping[str, int]) -> None:
        """Merge answers for questions on the current page."""
        self._require(ProgressState.in_progress)
        page_ids = {q.id for q in self.current_page_questions}
        off_page = sorted(k for k in answers if k not in page_ids)
        if off_page:
            raise InvalidInput(f"Items not on page {self.page + 1}: {', '.join(off_page)}")
        bad = sorted(
            k for k, v in answers.items()
            if isinstance(v, bool) or not isinstance(v, int) or not MIN_RESPONSE <= v <= MAX_RESPONSE
        )
        if bad:
            raise InvalidInput(f"Out-of-range ({MIN_RESPONSE}-{MAX_RESPONSE}) values: {', '.join(bad)}")
        self.answers.update(answers)

    def advance(self) -> None:
        self._require(ProgressState.in_progress)
        if self.is_last_page:
            raise InvalidTransition("already on the last page; submit instead")
        self._require_page_complete()
        self.page += 1

    def go_back(self) -> None:
        self._require(ProgressState.in_progress)
        if self.page == 0:
            raise InvalidTransition("already on the first page")
        self.page -= 1

    def submit(self) -> None:
        self._require(ProgressState.in_progress)
        if not self.is_last_page:
            raise InvalidTransition(f"submit is only allowed from the last page (page {self.page + 1} of {self.page_count})")
        self._require_page_complete()
        self.state = ProgressState.submitted

    def score(self) -> AssessmentScore:
        self._require(ProgressState.submitted)
        # Only the questions of this attempt are scored; prefilled extras are ignored.
        responses = {k: v for k, v in self.answers.items() if k in self._ids}
        result = score_assessment(self.questions, responses)
        self.state = ProgressState.scored
        logger.info("Assessment scored: %d answers -> %s", result.answered_count, result.profile.profile_label)
        return result


__all__ = [
    "ProgressState",
    "InvalidTransition",
    "IncompletePage",
    "AssessmentProgress",
]
