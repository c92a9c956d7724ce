"""Questionnaire data model: personal info, sections and their items."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict, Optional, Tuple, Union

RATING_VALUES = (1, 2, 3, 4, 5)

SECTION_KIND_RATING = "rating"
SECTION_KIND_TEXT = "text"
SECTION_KINDS = (SECTION_KIND_RATING, SECTION_KIND_TEXT)

INPUT_KIND_TEXT = "text"
INPUT_KIND_NUMBER = "number"
INPUT_KINDS = (INPUT_KIND_TEXT, INPUT_KIND_NUMBER)

PERSONAL_FIELDS = ("name", "date", "subject_context")


def is_rating_value(value) -> bool:
    """True for the ints 1-5. bool and float look numeric but are rejected."""
    return isinstance(value, int) and not isinstance(value, bool) and value in RATING_VALUES


def _today() -> str:
    return date.today().isoformat()


@dataclass(frozen=True)
class PersonalInfo:
    name: str = ""
    date: str = field(default_factory=_today)
    subject_context: str = ""


@dataclass(frozen=True)
class RatingItem:
    """A 1-5 rating question with a supporting comment."""

    id: str
    question: str
    rating: Optional[int] = None
    comment: str = ""
    comment_placeholder: Optional[str] = None

    kind = SECTION_KIND_RATING

    def __post_init__(self):
        if self.rating is not None and not is_rating_value(self.rating):
            raise ValueError(f"Rating for item {self.id!r} must be one of {RATING_VALUES}, got {self.rating!r}")


@dataclass(frozen=True)
class TextItem:
    """A free-text or numeric-only answer."""

    id: str
    question: str
    answer: str = ""
    description: Optional[str] = None
    input_kind: str = INPUT_KIND_TEXT

    kind = SECTION_KIND_TEXT

    def __post_init__(self):
        if self.input_kind not in INPUT_KINDS:
            raise ValueError(f"Unknown input kind {self.input_kind!r} for item {self.id!r}")

    @property
    def is_numeric(self) -> bool:
        return self.input_kind == INPUT_KIND_NUMBER


Item = Union[RatingItem, TextItem]


@dataclass(frozen=True)
class Section:
    """A titled group of homogeneous items."""

    id: str
    title: str
    description: str
    kind: str
    items: Tuple[Item, ...] = ()

    def __post_init__(self):
        if self.kind not in SECTION_KINDS:
            raise ValueError(f"Unknown section kind {self.kind!r} for section {self.id!r}")
        # Accept lists from callers but store an immutable tuple
        object.__setattr__(self, "items", tuple(self.items))
        seen = set()
        for item in self.items:
            if item.kind != self.kind:
                raise ValueError(
                    f"Item {item.id!r} is a {item.kind} item inside {self.kind} section {self.id!r}"
                )
            if item.id in seen:
                raise ValueError(f"Duplicate item id {item.id!r} in section {self.id!r}")
            seen.add(item.id)

    def index_of(self, item_id: str) -> int:
        for idx, item in enumerate(self.items):
            if item.id == item_id:
                return idx
        raise KeyError(f"No item {item_id!r} in section {self.id!r}")

    def replace_item(self, item: Item) -> "Section":
        idx = self.index_of(item.id)
        items = self.items[:idx] + (item,) + self.items[idx + 1:]
        return replace(self, items=items)


@dataclass(frozen=True)
class FormState:
    """Root aggregate: everything the user has entered in this session."""

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    sections: Tuple[Section, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "sections", tuple(self.sections))

    @property
    def total_steps(self) -> int:
        """Personal info step plus one step per section."""
        return 1 + len(self.sections)

    def replace_section(self, index: int, section: Section) -> "FormState":
        sections = self.sections[:index] + (section,) + self.sections[index + 1:]
        return replace(self, sections=sections)


@dataclass(frozen=True)
class RatingLevel:
    value: int
    label: str
    description: str


class RatingScale:
    """Read-only lookup from rating value to its label and description."""

    def __init__(self, levels):
        ordered = sorted(levels, key=lambda lvl: lvl.value)
        values = tuple(lvl.value for lvl in ordered)
        if values != RATING_VALUES:
            raise ValueError(f"Rating scale must define exactly {RATING_VALUES}, got {values}")
        self._levels: Dict[int, RatingLevel] = {lvl.value: lvl for lvl in ordered}

    def __iter__(self):
        return iter(self._levels.values())

    def __len__(self):
        return len(self._levels)

    def get(self, value: Optional[int]) -> Optional[RatingLevel]:
        if value is None:
            return None
        return self._levels.get(value)

    def label_for(self, value: Optional[int]) -> Optional[str]:
        level = self.get(value)
        return level.label if level else None
