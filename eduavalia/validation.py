"""Validity predicates and completion progress for the questionnaire."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from eduavalia.models import PERSONAL_FIELDS, RATING_VALUES, FormState, Item, RatingItem, Section

MIN_TEXT_ANSWER_LENGTH = 5


@dataclass(frozen=True)
class SectionStats:
    completed: int
    total: int

    @property
    def percent(self) -> int:
        if not self.total:
            return 100
        return _round_percent(self.completed, self.total)

    @property
    def is_complete(self) -> bool:
        return self.completed == self.total


def _round_percent(answered: int, total: int) -> int:
    # Half-up: 12.5 -> 13
    return int(100 * answered / total + 0.5)


def is_personal_field_valid(value: str) -> bool:
    return bool(value and value.strip())


def is_item_valid(item: Item) -> bool:
    """Single validity predicate shared by progress, step checks and section stats."""
    if isinstance(item, RatingItem):
        return item.rating in RATING_VALUES
    if item.is_numeric:
        return item.answer != ""
    return len(item.answer.strip()) > MIN_TEXT_ANSWER_LENGTH


def personal_info_count(form: FormState) -> int:
    info = form.personal_info
    return sum(1 for name in PERSONAL_FIELDS if is_personal_field_valid(getattr(info, name)))


def section_stats(section: Section) -> SectionStats:
    completed = sum(1 for item in section.items if is_item_valid(item))
    return SectionStats(completed=completed, total=len(section.items))


def progress(form: FormState) -> int:
    """Percentage (0-100) of personal fields and items that are currently valid."""
    total = len(PERSONAL_FIELDS)
    answered = personal_info_count(form)
    for section in form.sections:
        stats = section_stats(section)
        total += stats.total
        answered += stats.completed
    return _round_percent(answered, total)


def invalid_fields(form: FormState, step: int) -> List[str]:
    """Personal field names (step 0) or item ids (step k) failing validation."""
    if step == 0:
        info = form.personal_info
        return [name for name in PERSONAL_FIELDS if not is_personal_field_valid(getattr(info, name))]
    if not 0 < step <= len(form.sections):
        return []
    section = form.sections[step - 1]
    return [item.id for item in section.items if not is_item_valid(item)]


def is_step_valid(form: FormState, step: int) -> bool:
    return not invalid_fields(form, step)
